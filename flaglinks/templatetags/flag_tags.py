from django import template

from ..models import Flag

register = template.Library()


@register.simple_tag(takes_context=True)
def flag_link(context, flag, entity):
    """
    Render the link to flag or unflag an entity for the current user,
    nothing is rendered when the user may not do that.

    Usage::

        {% load flag_tags %}
        {% flag_link "bookmark" article %}
    """
    request = context["request"]
    if not isinstance(flag, Flag):
        flag = Flag.objects.get(pk=flag)

    plugin = flag.get_link_type_plugin(request.user, request)
    return plugin.get_as_flag_link(flag, entity).render(request)
