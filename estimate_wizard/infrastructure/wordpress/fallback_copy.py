from estimate_wizard.domain.entities.content import EmailTemplate, ResultsContent


FALLBACK_RESULTS = ResultsContent(
    headline="Your Estimate Results",
    description=(
        "Thank you for using our estimate calculator. Your results have been calculated "
        "based on the information provided."
    ),
    footer_text="For a more detailed estimate, please contact our team.",
    disclaimer=(
        "This estimate is preliminary and may vary based on specific project requirements "
        "and market conditions."
    ),
    is_fallback=True,
)

FALLBACK_EMAIL_TEMPLATE = EmailTemplate(
    subject="Your Estimate Results",
    html_body="<p>Thank you for using our estimate calculator. Your results are ready!</p>",
    is_fallback=True,
)

DEFAULT_EMAIL_SUBJECT = "Your Estimate Results"

CATEGORY_DETAIL_CONTENT: dict[str, str] = {
    "kitchens": (
        "Transform your kitchen with our comprehensive renovation estimates. We cover everything from "
        "cabinet installation and countertops to appliances, lighting, plumbing, and electrical work."
    ),
    "bathrooms": (
        "Upgrade your bathroom with professional renovation estimates. From small powder rooms to luxury "
        "master suites, we provide detailed cost breakdowns for fixtures, tile work, plumbing and ventilation."
    ),
    "basements": (
        "Maximize your home's potential with basement finishing estimates. We cover waterproofing, "
        "insulation, framing, drywall, flooring, electrical, plumbing, and HVAC systems."
    ),
    "windows": (
        "Improve your home's energy efficiency and curb appeal with new windows. Our estimates cover "
        "window selection, removal of old windows, installation, trim work, and weatherproofing."
    ),
    "flooring": (
        "Update your home with beautiful new flooring. We provide estimates for hardwood, laminate, tile, "
        "carpet, luxury vinyl, and more, including subfloor preparation and installation."
    ),
    "home renovations": (
        "Transform your entire home with comprehensive renovation estimates. From room additions and open "
        "floor plans to whole-house updates, with phased construction timelines."
    ),
    "structural": (
        "Ensure your home's structural integrity with professional estimates for foundation work, beam "
        "installation, wall removal, structural repairs, and load-bearing modifications."
    ),
}


def category_detail_content(title: str, long_description: str) -> str:
    if long_description and long_description.strip():
        return long_description
    return CATEGORY_DETAIL_CONTENT.get(
        title.lower(),
        f"Professional {title.lower()} estimates tailored to your project needs.",
    )
