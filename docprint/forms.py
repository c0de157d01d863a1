"""
Configuration form for the PDF renderer.

Lists every render option with its label, default and help text. The form
is used both to edit settings in a UI and, through describe_fields(), as a
plain description of the configuration schema.
"""

from pathlib import Path

from django import forms

from .conf import DEFAULT_RENDER_CONFIG, normalize_orientation
from .exceptions import ConfigurationError


def _margin_field(label, name):
    return forms.FloatField(
        label=label,
        min_value=0,
        initial=DEFAULT_RENDER_CONFIG[name],
        help_text="Millimetres",
    )


def _markup_field(label, help_text):
    return forms.CharField(
        label=label,
        required=False,
        strip=False,
        widget=forms.Textarea(attrs={'rows': 6}),
        help_text=help_text,
    )


class PdfConfigurationForm(forms.Form):
    """Form with one field per render option."""

    mode = forms.CharField(
        label="Mode",
        initial=DEFAULT_RENDER_CONFIG['mode'],
        help_text="'c' for core fonts, or a language code such as 'de-DE'",
    )
    page_orientation = forms.ChoiceField(
        label="Page orientation",
        choices=[('P', "Portrait"), ('L', "Landscape")],
        initial=DEFAULT_RENDER_CONFIG['page_orientation'],
    )
    page_format = forms.CharField(
        label="Page format",
        initial=DEFAULT_RENDER_CONFIG['page_format'],
        help_text="A3, A4, A5, B5, letter, legal, ...",
    )
    top_margin = _margin_field("Top margin", 'top_margin')
    right_margin = _margin_field("Right margin", 'right_margin')
    bottom_margin = _margin_field("Bottom margin", 'bottom_margin')
    left_margin = _margin_field("Left margin", 'left_margin')
    header_margin = _margin_field("Header margin", 'header_margin')
    footer_margin = _margin_field("Footer margin", 'footer_margin')
    font = forms.CharField(
        label="Font",
        initial=DEFAULT_RENDER_CONFIG['font'],
        help_text="Default font family",
    )
    font_size = forms.IntegerField(
        label="Font size",
        min_value=1,
        initial=DEFAULT_RENDER_CONFIG['font_size'],
        help_text="Points",
    )
    author = forms.CharField(label="Author", required=False)
    title = forms.CharField(label="Title", required=False)
    header_first_page = forms.BooleanField(
        label="Show header on first page",
        required=False,
        initial=DEFAULT_RENDER_CONFIG['header_first_page'],
    )
    css_file = forms.CharField(
        label="CSS file",
        required=False,
        help_text="Path to a stylesheet; takes precedence over the CSS field",
    )
    css = forms.CharField(
        label="CSS",
        required=False,
        strip=False,
        widget=forms.Textarea(attrs={'rows': 6}),
    )
    markup_header = _markup_field("Header markup", "HTML or path to a template file")
    markup_footer = _markup_field("Footer markup", "HTML or path to a template file")
    markup_main = _markup_field("Body markup", "HTML or path to a template file")
    sanitize = forms.BooleanField(
        label="Sanitize markup",
        required=False,
        help_text="Strip unsafe tags from user supplied markup",
    )
    base_url = forms.CharField(
        label="Base URL",
        required=False,
        help_text="Used to resolve relative image and stylesheet URLs",
    )

    def clean_page_orientation(self):
        try:
            return normalize_orientation(self.cleaned_data['page_orientation'])
        except ConfigurationError as e:
            raise forms.ValidationError(str(e))

    def clean_css_file(self):
        css_file = self.cleaned_data['css_file']
        if css_file and not Path(css_file).is_file():
            raise forms.ValidationError(f"Stylesheet not found: {css_file}")
        return css_file


FIELD_TYPES = {
    forms.BooleanField: 'checkbox',
    forms.IntegerField: 'integer',
    forms.FloatField: 'float',
    forms.ChoiceField: 'select',
}


def describe_fields(form=None) -> list:
    """
    Describe the configuration schema as a list of dicts.

    Each entry has name, type ('text', 'float', 'integer', 'checkbox' or
    'select'), label, initial value and notes. Initial values come from
    the form's initial data when a bound or pre-filled form is given.
    """
    form = form or PdfConfigurationForm()
    fields = []
    for name, field in form.fields.items():
        field_type = next(
            (label for cls, label in FIELD_TYPES.items() if type(field) is cls),
            'text',
        )
        fields.append({
            'name': name,
            'type': field_type,
            'label': str(field.label),
            'initial': form.get_initial_for_field(field, name),
            'notes': str(field.help_text),
        })
    return fields
