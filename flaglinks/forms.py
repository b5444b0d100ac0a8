from django import forms

from .plugins import ActionLinkTypePluginManager


class LinkTypeSettingsForm(forms.Form):
    """
    Selects the link type of a flag, the selected link type adds its own
    settings to the form.
    """

    link_type = forms.ChoiceField(label="Link type")

    def __init__(self, flag, user, *args, **kwargs):
        super(LinkTypeSettingsForm, self).__init__(*args, **kwargs)
        self.flag = flag

        choices = ActionLinkTypePluginManager.get_choices()
        self.fields["link_type"].choices = choices
        self.fields["link_type"].initial = flag.link_type

        link_type = flag.link_type
        if self.is_bound:
            selected = self.data.get(self.add_prefix("link_type"))
            if selected in dict(choices):
                link_type = selected

        if link_type == flag.link_type:
            config = flag.link_type_config
        else:
            config = {}

        self.plugin = ActionLinkTypePluginManager.create_instance(link_type, config, user)
        self.plugin.build_configuration_form(self)

    def clean(self):
        cleaned_data = super(LinkTypeSettingsForm, self).clean()
        self.plugin.validate_configuration_form(self)
        return cleaned_data

    def save(self):
        self.plugin.submit_configuration_form(self)

        self.flag.link_type = self.plugin.plugin_name
        self.flag.link_type_config = self.plugin.get_configuration()
        self.flag.save(update_fields=["link_type", "link_type_config"])

        return self.flag
