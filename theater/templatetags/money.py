from django import template

from theater.utils import format_price

register = template.Library()


def _to_int(val):
    try:
        return int(val)
    except (TypeError, ValueError):
        return 0


@register.filter
def currency(value):
    """Format a whole amount with the cinema currency: {{ revenue|currency }} -> 1200 RUB"""
    return format_price(_to_int(value))


@register.filter
def mul(a, b):
    """Multiply in template: {{ movie.ticket_price|mul:2|currency }}"""
    return _to_int(a) * _to_int(b)
