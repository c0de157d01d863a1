"""
Django management command to render a PDF from markup files or text.

Example:
    python manage.py render_pdf /tmp/out.pdf --main templates/report.html \
        --css-file static/print.css --orientation L --author "ACME"
"""

from django.core.management.base import BaseCommand, CommandError

from docprint.exceptions import DocPrintError
from docprint.printing import DocumentRenderFacade


class Command(BaseCommand):
    help = 'Render markup (literal HTML or template files) to a PDF file'

    def add_arguments(self, parser):
        parser.add_argument('output', help='Path of the PDF file to write')
        parser.add_argument('--main', default='', help='Body markup or template path')
        parser.add_argument('--header', default='', help='Header markup or template path')
        parser.add_argument('--footer', default='', help='Footer markup or template path')
        parser.add_argument('--css-file', default='', help='Stylesheet path')
        parser.add_argument('--css', default='', help='Inline stylesheet')
        parser.add_argument('--orientation', default=None, help='P (portrait) or L (landscape)')
        parser.add_argument('--format', dest='page_format', default=None, help='Page format, e.g. A4')
        parser.add_argument('--author', default=None)
        parser.add_argument('--title', default=None)
        parser.add_argument(
            '--no-first-page-header',
            action='store_true',
            help='Hide the header on page one',
        )
        parser.add_argument('--sanitize', action='store_true', help='Sanitize markup before rendering')

    def handle(self, *args, **options):
        """Execute the command."""
        values = {
            'markup_main': options['main'],
            'markup_header': options['header'],
            'markup_footer': options['footer'],
            'css_file': options['css_file'],
            'css': options['css'],
            'page_orientation': options['orientation'],
            'page_format': options['page_format'],
            'author': options['author'],
            'title': options['title'],
            'sanitize': options['sanitize'] or None,
            'header_first_page': False if options['no_first_page_header'] else None,
        }
        # Unset options keep their configured defaults
        values = {k: v for k, v in values.items() if v is not None}

        try:
            facade = DocumentRenderFacade(**values)
            facade.save(options['output'])
            pages = facade.page_count()
        except DocPrintError as e:
            raise CommandError(f"Failed to render PDF: {e}")
        except ImportError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(f"✓ Wrote {options['output']} (pages: {pages})")
        )
