from __future__ import annotations

from datetime import datetime
from html import escape

from estimate_wizard.domain.entities.contact import FormContact
from estimate_wizard.domain.entities.estimate import EstimateBreakdown


DEFAULT_CONFIRMATION_BODY = (
    "<p>Thank you for using our estimate calculator. Your personalized results have been "
    "calculated based on your selections.</p><p>We'll be in touch soon with your detailed estimate.</p>"
)


def render_breakdown_html(breakdown: EstimateBreakdown) -> str:
    rows = []
    for item in breakdown.line_items:
        rows.append(
            "<tr>"
            f'<td style="padding: 8px; border-bottom: 1px solid #eee;">{escape(item.description)}</td>'
            f'<td style="padding: 8px; border-bottom: 1px solid #eee; text-align: right;">'
            f"{escape(item.formatted_cost)}</td>"
            "</tr>"
        )
    rows.append(
        '<tr style="background-color: #f5f5f5; font-weight: bold;">'
        '<td style="padding: 8px;">Estimate Total</td>'
        f'<td style="padding: 8px; text-align: right;">{escape(breakdown.formatted_total)}</td>'
        "</tr>"
    )
    return (
        '<table style="width: 100%; border-collapse: collapse; font-family: Arial, sans-serif;">'
        + "".join(rows)
        + "</table>"
    )


def compose_confirmation_html(name: str, template_html: str, breakdown_html: str) -> str:
    body = template_html if template_html and template_html.strip() else DEFAULT_CONFIRMATION_BODY
    return f"<p>Hello {escape(name)},</p>{body}{breakdown_html}"


def compose_notification_subject(contact: FormContact) -> str:
    return f"New Estimate Lead: {contact.name} ({contact.email})"


def compose_notification_html(
    contact: FormContact,
    breakdown_html: str,
    submitted_at: datetime | None = None,
) -> str:
    submitted_at = submitted_at or datetime.now()
    name = escape(contact.name)
    email = escape(contact.email)
    phone = escape(contact.phone)
    zip_code = escape(contact.zip)
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #C12530; border-bottom: 2px solid #C12530; padding-bottom: 10px;">New Estimate Calculator Lead</h2>
  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3 style="color: #333; margin-top: 0;">Contact Information:</h3>
    <table style="width: 100%; border-collapse: collapse;">
      <tr><td style="padding: 8px; font-weight: bold; width: 30%;">Name:</td><td style="padding: 8px;">{name}</td></tr>
      <tr><td style="padding: 8px; font-weight: bold;">Email:</td><td style="padding: 8px;"><a href="mailto:{email}">{email}</a></td></tr>
      <tr><td style="padding: 8px; font-weight: bold;">Phone:</td><td style="padding: 8px;"><a href="tel:{phone}">{phone}</a></td></tr>
      <tr><td style="padding: 8px; font-weight: bold;">ZIP Code:</td><td style="padding: 8px;">{zip_code}</td></tr>
      <tr><td style="padding: 8px; font-weight: bold;">Submission Time:</td><td style="padding: 8px;">{submitted_at:%Y-%m-%d %H:%M}</td></tr>
    </table>
  </div>
  <div style="margin: 20px 0;">
    <h3 style="color: #333;">Customer's Project Estimate:</h3>
    {breakdown_html}
  </div>
  <div style="background-color: #e8f4f8; padding: 15px; border-radius: 8px; margin: 20px 0;">
    <h4 style="color: #0066cc; margin-top: 0;">Next Steps:</h4>
    <ul style="margin: 10px 0; padding-left: 20px;">
      <li>Follow up with customer within 24 hours</li>
      <li>Schedule consultation if interested</li>
      <li>Customer has already received their estimate via email</li>
    </ul>
  </div>
</div>
""".strip()
