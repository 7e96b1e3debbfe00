from django import forms
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Row, Column, Field, Fieldset, Submit


BUSINESS_TYPES = [
    ('restaurant', 'Restaurant'),
    ('hotel', 'Hotel'),
    ('retail', 'Retail'),
    ('services', 'Services'),
    ('construction', 'Construction'),
    ('cleaning', 'Cleaning'),
    ('healthcare', 'Healthcare'),
    ('other', 'Other'),
]

TICKET_STATUSES = [
    ('open', 'Open'),
    ('in_progress', 'In progress'),
    ('resolved', 'Resolved'),
    ('closed', 'Closed'),
    ('duplicate', 'Duplicate'),
]

TICKET_PRIORITIES = [
    ('low', 'Low'),
    ('medium', 'Medium'),
    ('high', 'High'),
    ('urgent', 'Urgent'),
]

REPORT_STATUSES = [
    ('pending', 'Pending'),
    ('in_progress', 'In progress'),
    ('resolved', 'Resolved'),
    ('closed', 'Closed'),
    ('archived', 'Archived'),
]


class BusinessRegisterForm(forms.Form):
    """Admin registration of a business together with its subscription."""

    business_name = forms.CharField(max_length=200, widget=forms.TextInput(attrs={'class': 'form-control'}))
    business_email = forms.EmailField(widget=forms.EmailInput(attrs={'class': 'form-control'}))
    business_type = forms.ChoiceField(choices=BUSINESS_TYPES, widget=forms.Select(attrs={'class': 'form-select'}))
    full_name = forms.CharField(max_length=200, label='Owner full name',
                                widget=forms.TextInput(attrs={'class': 'form-control'}))
    phone = forms.CharField(max_length=30, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))

    street = forms.CharField(max_length=255, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    postcode = forms.CharField(max_length=20, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    tax_id = forms.CharField(max_length=50, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    vat_number = forms.CharField(max_length=50, required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))

    plan_id = forms.CharField(max_length=100, label='Plan ID', widget=forms.TextInput(attrs={'class': 'form-control'}))
    interval = forms.ChoiceField(choices=[('month', 'Monthly'), ('year', 'Yearly')],
                                 widget=forms.Select(attrs={'class': 'form-select'}))

    auto_verify_email = forms.BooleanField(required=False, initial=True)
    send_welcome_email = forms.BooleanField(required=False, initial=True)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Fieldset(
                'Business',
                Row(Column('business_name', css_class='col-md-6'), Column('business_email', css_class='col-md-6')),
                Row(Column('business_type', css_class='col-md-6'), Column('phone', css_class='col-md-6')),
                Field('full_name'),
            ),
            Fieldset(
                'Address & Tax',
                Row(Column('street', css_class='col-md-8'), Column('postcode', css_class='col-md-4')),
                Row(Column('tax_id', css_class='col-md-6'), Column('vat_number', css_class='col-md-6')),
            ),
            Fieldset(
                'Subscription',
                Row(Column('plan_id', css_class='col-md-8'), Column('interval', css_class='col-md-4')),
                Field('auto_verify_email'),
                Field('send_welcome_email'),
            ),
            Submit('submit', 'Register Business', css_class='btn btn-primary'),
        )

    def to_payload(self):
        """Request body of the admin register-and-subscribe call."""
        data = self.cleaned_data
        payload = {
            'businessName': data['business_name'],
            'businessEmail': data['business_email'],
            'businessType': data['business_type'],
            'fullName': data['full_name'],
            'subscription': {
                'planId': data['plan_id'],
                'interval': data['interval'],
            },
            'autoVerifyEmail': data['auto_verify_email'],
            'sendWelcomeEmail': data['send_welcome_email'],
        }
        if data.get('phone'):
            payload['phone'] = data['phone']
        address = {key: data[key] for key in ('street', 'postcode') if data.get(key)}
        if address:
            payload['address'] = address
        if data.get('tax_id'):
            payload['taxId'] = data['tax_id']
        if data.get('vat_number'):
            payload['vatNumber'] = data['vat_number']
        return payload


class LoyaltyProgramForm(forms.Form):
    program_name = forms.CharField(max_length=200, widget=forms.TextInput(attrs={'class': 'form-control'}))
    currency = forms.CharField(max_length=3, initial='EUR', widget=forms.TextInput(attrs={'class': 'form-control'}))
    spend = forms.FloatField(min_value=0, label='Points per currency unit spent',
                             widget=forms.NumberInput(attrs={'class': 'form-control'}))
    sign_up_bonus = forms.IntegerField(min_value=0, initial=0,
                                       widget=forms.NumberInput(attrs={'class': 'form-control'}))
    review_points = forms.IntegerField(min_value=0, initial=0,
                                       widget=forms.NumberInput(attrs={'class': 'form-control'}))
    social_share_points = forms.IntegerField(min_value=0, initial=0,
                                             widget=forms.NumberInput(attrs={'class': 'form-control'}))
    points_per_discount = forms.IntegerField(min_value=1, widget=forms.NumberInput(attrs={'class': 'form-control'}))
    discount_value = forms.FloatField(min_value=0, widget=forms.NumberInput(attrs={'class': 'form-control'}))
    discount_type = forms.ChoiceField(choices=[('fixed', 'Fixed'), ('percentage', 'Percentage')],
                                      widget=forms.Select(attrs={'class': 'form-select'}))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Row(Column('program_name', css_class='col-md-8'), Column('currency', css_class='col-md-4')),
            Fieldset(
                'Earning points',
                Row(Column('spend', css_class='col-md-3'), Column('sign_up_bonus', css_class='col-md-3'),
                    Column('review_points', css_class='col-md-3'), Column('social_share_points', css_class='col-md-3')),
            ),
            Fieldset(
                'Redeeming points',
                Row(Column('points_per_discount', css_class='col-md-4'), Column('discount_value', css_class='col-md-4'),
                    Column('discount_type', css_class='col-md-4')),
            ),
            Submit('submit', 'Save Program', css_class='btn btn-primary'),
        )

    @classmethod
    def initial_from_program(cls, program):
        """Form initial values from a gateway loyalty program."""
        program = program or {}
        earning = (program.get('pointsSystem') or {}).get('earningPoints') or {}
        redeeming = (program.get('pointsSystem') or {}).get('redeemingPoints') or {}
        return {
            'program_name': program.get('programName', ''),
            'currency': program.get('currency', 'EUR'),
            'spend': earning.get('spend'),
            'sign_up_bonus': earning.get('signUpBonus', 0),
            'review_points': earning.get('reviewPoints', 0),
            'social_share_points': earning.get('socialSharePoints', 0),
            'points_per_discount': redeeming.get('pointsPerDiscount'),
            'discount_value': redeeming.get('discountValue'),
            'discount_type': redeeming.get('discountType', 'fixed'),
        }

    def to_payload(self):
        data = self.cleaned_data
        return {
            'programName': data['program_name'],
            'currency': data['currency'].upper(),
            'pointsSystem': {
                'earningPoints': {
                    'spend': data['spend'],
                    'signUpBonus': data['sign_up_bonus'],
                    'reviewPoints': data['review_points'],
                    'socialSharePoints': data['social_share_points'],
                },
                'redeemingPoints': {
                    'pointsPerDiscount': data['points_per_discount'],
                    'discountValue': data['discount_value'],
                    'discountType': data['discount_type'],
                },
            },
        }


class TicketReplyForm(forms.Form):
    message = forms.CharField(widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4,
                                                           'placeholder': 'Write a reply...'}))

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Field('message'),
            Submit('submit', 'Send Reply', css_class='btn btn-primary'),
        )


class TicketStatusForm(forms.Form):
    status = forms.ChoiceField(choices=TICKET_STATUSES)
    priority = forms.ChoiceField(choices=TICKET_PRIORITIES, required=False)
    resolution_notes = forms.CharField(required=False)

    def to_payload(self):
        payload = {'status': self.cleaned_data['status']}
        if self.cleaned_data.get('priority'):
            payload['priority'] = self.cleaned_data['priority']
        if self.cleaned_data.get('resolution_notes'):
            payload['resolutionNotes'] = self.cleaned_data['resolution_notes']
        return payload


class ReportStatusForm(forms.Form):
    status = forms.ChoiceField(choices=REPORT_STATUSES)
