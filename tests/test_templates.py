from agrinova_contact.contact import templates
from agrinova_contact.utils.config_loader import BrandConfig

BRAND = BrandConfig()


def test_escape_html_covers_markup_characters():
    assert templates.escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"
    assert templates.escape_html(None) == ""
    assert templates.escape_html("&lt;") == "&amp;lt;"


def test_team_email_placeholders_for_missing_fields():
    fields = dict(full_name="Jane Doe", email="jane@example.com", phone="", interest="", message="Hi there, friends")

    html = templates.team_email_html(BRAND, **fields)
    text = templates.team_email_text(BRAND, **fields)

    assert "Not provided" in html and "Not specified" in html
    assert "Phone      : Not provided" in text
    assert "Interest   : Not specified" in text
    assert "mailto:jane@example.com" in html


def test_auto_reply_uses_brand_details():
    html = templates.auto_reply_html(BRAND, "Jane", "team@agrinovalabs.site")
    text = templates.auto_reply_text(BRAND, "Jane", "team@agrinovalabs.site")

    assert "Hi Jane, we got your message!" in html
    assert BRAND.support_phone in html
    assert "mailto:team@agrinovalabs.site" in html
    assert text.startswith("Hi Jane,")
    assert BRAND.website_url in text
