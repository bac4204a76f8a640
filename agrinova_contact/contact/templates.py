"""
Email bodies for the team notification and the submitter auto-reply.

HTML bodies escape every interpolated user value; text bodies are sent verbatim.
"""

from __future__ import annotations

from typing import Any

from agrinova_contact.utils.config_loader import BrandConfig

NOT_PROVIDED = "Not provided"
NOT_SPECIFIED = "Not specified"

_STYLE = """
  body{margin:0;padding:0;background:#f0faf2;font-family:Arial,sans-serif;}
  .wrap{max-width:600px;margin:32px auto;background:#fff;border-radius:16px;overflow:hidden;border:1px solid rgba(76,175,80,.2);}
  .hdr{background:linear-gradient(135deg,#2d7a3a,#4caf58);padding:30px 40px;text-align:center;}
  .hdr h1{color:#fff;font-size:1.35rem;margin:0;}
  .hdr p{color:rgba(255,255,255,.8);margin:6px 0 0;font-size:.83rem;}
  .bdy{padding:34px 40px;color:#1e3d24;line-height:1.7;font-size:.92rem;}
  .bdy h2{color:#2d7a3a;font-size:1rem;margin:0 0 20px;}
  .lbl{font-size:.7rem;font-weight:700;text-transform:uppercase;letter-spacing:.09em;color:#5a8a62;}
  .val{margin:0 0 16px;}
  .msgbox{background:#f0faf2;border-left:4px solid #4caf58;padding:14px 18px;white-space:pre-wrap;}
  .box{background:#f0faf2;border-radius:12px;padding:16px 20px;margin:20px 0;font-size:.86rem;color:#5a8a62;}
  .ftr{background:#d4f0d8;padding:16px 40px;text-align:center;font-size:.73rem;color:#5a8a62;}
  a{color:#2d7a3a;}
"""


def escape_html(value: Any) -> str:
    text = "" if value is None else str(value)
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _page(brand: BrandConfig, tagline: str, body: str, footer: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"/>
<style>{_STYLE}</style>
</head>
<body>
<div class="wrap">
  <div class="hdr">
    <h1>{escape_html(brand.name)}</h1>
    <p>{tagline}</p>
  </div>
  <div class="bdy">
{body}
  </div>
  <div class="ftr">{footer}</div>
</div>
</body>
</html>"""


def team_email_html(
    brand: BrandConfig,
    *,
    full_name: str,
    email: str,
    phone: str,
    interest: str,
    message: str,
) -> str:
    site = escape_html(brand.website_url)
    mail = escape_html(email)
    rows = "\n".join(
        f'    <div class="lbl">{label}</div><p class="val">{value}</p>'
        for label, value in (
            ("Full Name", escape_html(full_name)),
            ("Reply-To Email", f'<a href="mailto:{mail}">{mail}</a>'),
            ("Phone Number", escape_html(phone or NOT_PROVIDED)),
            ("Area of Interest", escape_html(interest or NOT_SPECIFIED)),
        )
    )
    body = (
        "    <h2>You have a new message</h2>\n"
        f"{rows}\n"
        '    <div class="lbl">Message</div>\n'
        f'    <div class="msgbox">{escape_html(message)}</div>'
    )
    footer = f'Sent via <a href="{site}">{site}</a> &middot; Reply directly to <a href="mailto:{mail}">{mail}</a>'
    return _page(brand, f"New contact form submission from {site}", body, footer)


def team_email_text(
    brand: BrandConfig,
    *,
    full_name: str,
    email: str,
    phone: str,
    interest: str,
    message: str,
) -> str:
    return f"""NEW CONTACT FORM SUBMISSION - {brand.name}
=============================================
Full Name  : {full_name}
Email      : {email}
Phone      : {phone or NOT_PROVIDED}
Interest   : {interest or NOT_SPECIFIED}

MESSAGE:
--------
{message}

---------------------------------------------
Sent via {brand.website_url}
Reply directly to: {email}
"""


def auto_reply_html(brand: BrandConfig, first_name: str, contact_address: str) -> str:
    name = escape_html(brand.name)
    site = escape_html(brand.website_url)
    contact = escape_html(contact_address)
    body = f"""    <h2>Hi {escape_html(first_name)}, we got your message!</h2>
    <p>Thank you for reaching out to <strong>{name}</strong>. Our team has received your message and will respond within <strong>24 business hours</strong>.</p>
    <div class="box">
      <strong>Need urgent help?</strong> Call us: <strong>{escape_html(brand.support_phone)}</strong><br/>
      <strong>Email:</strong> <a href="mailto:{contact}">{contact}</a><br/>
      <strong>Hours:</strong> {escape_html(brand.office_hours)}
    </div>
    <p>Warm regards,<br/><strong>The {name} Team</strong></p>"""
    footer = f'{name} &middot; {escape_html(brand.location)} &middot; <a href="{site}">{site}</a>'
    return _page(brand, site, body, footer)


def auto_reply_text(brand: BrandConfig, first_name: str, contact_address: str) -> str:
    return f"""Hi {first_name},

Thank you for reaching out to {brand.name}!

We've received your message and will reply within 24 business hours.

NEED HELP SOONER?
  Call   : {brand.support_phone}
  Email  : {contact_address}
  Hours  : {brand.office_hours}

Explore our platform: {brand.website_url}

Warm regards,
The {brand.name} Team
{brand.location}
"""
