from django import forms
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Field, Submit
from .models import Client


class ClientSettingsForm(forms.ModelForm):
    class Meta:
        model = Client
        fields = [
            'logo', 'name', 'industry', 'website', 'description',
        ]
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'industry': forms.TextInput(attrs={'class': 'form-control'}),
            'website': forms.URLInput(attrs={'class': 'form-control'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
            'logo': forms.FileInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.form_enctype = 'multipart/form-data'
        self.helper.layout = Layout(
            Field('logo', css_class='mb-3'),
            Field('name', css_class='mb-3'),
            Field('industry', css_class='mb-3'),
            Field('website', css_class='mb-3'),
            Field('description', css_class='mb-3'),
            Submit('submit', 'Save Settings', css_class='btn btn-primary')
        )
