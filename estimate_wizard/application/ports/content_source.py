from __future__ import annotations

from abc import ABC, abstractmethod

from estimate_wizard.domain.entities.content import CalculatorData, EmailTemplate, HomeContent, ResultsContent


class ContentSourcePort(ABC):
    @abstractmethod
    async def fetch_home_content(self) -> HomeContent:
        """Headline, help text and the category list."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_category_content(self, category_id: str) -> CalculatorData:
        """Questions and form copy of one category. Raises NotFoundError for unknown ids."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_results_content(self) -> ResultsContent:
        raise NotImplementedError

    @abstractmethod
    async def fetch_email_template(self) -> EmailTemplate:
        raise NotImplementedError
