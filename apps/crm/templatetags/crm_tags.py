from django import template
from django.utils.dateparse import parse_datetime

register = template.Library()


@register.filter
def get_item(mapping, key):
    """{{ stats|get_item:"open" }}"""
    if isinstance(mapping, dict):
        return mapping.get(key)
    return None


@register.filter
def gateway_id(record):
    """Id of a gateway record; templates cannot read `_id` directly."""
    if not isinstance(record, dict):
        return ''
    return record.get('_id') or record.get('id') or ''


@register.filter
def gateway_date(value):
    """Parse an ISO timestamp from the gateway so `|date` can format it."""
    if not value:
        return None
    return parse_datetime(str(value).replace('Z', '+00:00'))


@register.simple_tag(takes_context=True)
def page_url(context, page):
    """Current query string with `page` replaced."""
    query = context['request'].GET.copy()
    query['page'] = page
    return f'?{query.urlencode()}'
