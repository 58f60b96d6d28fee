from django import template

from marketplace.utils import buyer_whatsapp_url, contact_whatsapp_url, format_currency

register = template.Library()


@register.filter
def rupiah(value):
    """Formats an amount as ``Rp 1.234.567``."""
    if value in (None, ""):
        return "-"
    try:
        return format_currency(value)
    except (TypeError, ValueError):
        return value


@register.filter
def price_range(listing):
    """``Rp 50.000 - Rp 100.000`` for a Jasa Cari row (model or dict)."""
    get = listing.get if isinstance(listing, dict) else lambda name: getattr(listing, name, None)
    return f"{rupiah(get('price_min'))} - {rupiah(get('price_max'))}"


@register.filter
def whatsapp_buy_url(code):
    return buyer_whatsapp_url(code)


@register.filter
def whatsapp_contact_url(phone):
    return contact_whatsapp_url(phone)


@register.filter
def add_class(field, css_classes_to_add):
    """
    Adds CSS classes to a bound form field. Anything that is not a field is
    returned untouched.
    """
    if not hasattr(field, 'as_widget'):
        return field
    all_attrs = field.field.widget.attrs.copy()
    existing_classes = all_attrs.get('class', '')
    all_attrs['class'] = f'{existing_classes} {css_classes_to_add}'.strip()
    return field.as_widget(attrs=all_attrs)
