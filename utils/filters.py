import markdown2
from markupsafe import Markup

from utils.helpers import format_day, is_image_proof, is_safe_link


def register_filters(app):
    """Register custom template filters."""

    @app.template_filter('markdown')
    def markdown_to_html(text):
        """Convert markdown text to HTML."""
        if not text:
            return ''
        # Descriptions are intern-supplied, so raw HTML is escaped
        html = markdown2.markdown(text, safe_mode='escape')
        return Markup(html)

    app.add_template_filter(format_day, 'format_day')
    app.add_template_test(is_image_proof, 'image_proof')
    app.add_template_test(is_safe_link, 'safe_link')

    return app
