"""Custom template filters for core app."""

from django import template

register = template.Library()


@register.filter(name="get_item")
def get_item(mapping, key):
    """
    Look up a key in a dict.

    Usage: {{ record|get_item:column.name }}
    """
    if not mapping:
        return ""
    return mapping.get(key, "")


@register.filter(name="status_badge")
def status_badge(value):
    """
    Map an approval status to a badge CSS class.

    Example: "approved" -> "badge badge-success"
    """
    if value == "approved":
        return "badge badge-success"
    return "badge badge-warning"


@register.filter(name="sort_indicator")
def sort_indicator(view_state, key):
    """Arrow shown next to the active sort column."""
    if not view_state or view_state.sort_by != key:
        return ""
    return "▲" if view_state.sort_order == "asc" else "▼"
