from django import forms
from django.db.models import Q
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Row, Column, Field, Submit

from .models import Department, Staff, StaffRole, StaffStatus


class StaffFilterForm(forms.Form):
    search = forms.CharField(required=False, widget=forms.TextInput(attrs={
        'class': 'form-control', 'placeholder': 'Name, email or employee ID'}))
    department = forms.ModelChoiceField(queryset=Department.objects.none(), required=False,
                                        empty_label='All departments',
                                        widget=forms.Select(attrs={'class': 'form-select'}))
    role = forms.ChoiceField(choices=[('', 'All roles')] + list(StaffRole.choices), required=False,
                             widget=forms.Select(attrs={'class': 'form-select'}))
    status = forms.ChoiceField(choices=[('', 'All statuses')] + list(StaffStatus.choices), required=False,
                               widget=forms.Select(attrs={'class': 'form-select'}))

    def __init__(self, *args, **kwargs):
        self.client = kwargs.pop('client', None)
        super().__init__(*args, **kwargs)

        if self.client:
            self.fields['department'].queryset = Department.objects.filter(
                client=self.client, is_active=True).order_by('name')

        self.helper = FormHelper()
        self.helper.form_method = 'get'
        self.helper.form_tag = False
        self.helper.disable_csrf = True

    def apply(self, queryset):
        """Filter a staff queryset by the submitted values."""
        if not self.is_valid():
            return queryset

        search = self.cleaned_data.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(first_name__icontains=search) |
                Q(last_name__icontains=search) |
                Q(email__icontains=search) |
                Q(employee_id__icontains=search)
            )
        if self.cleaned_data.get('department'):
            queryset = queryset.filter(department=self.cleaned_data['department'])
        if self.cleaned_data.get('role'):
            queryset = queryset.filter(role=self.cleaned_data['role'])
        if self.cleaned_data.get('status'):
            queryset = queryset.filter(status=self.cleaned_data['status'])
        return queryset


class StaffForm(forms.ModelForm):
    password = forms.CharField(required=False, min_length=8, label='App password',
                               widget=forms.PasswordInput(attrs={'class': 'form-control'}),
                               help_text='Required to create the app login')

    class Meta:
        model = Staff
        fields = ['first_name', 'last_name', 'email', 'phone', 'department', 'role', 'sub_role',
                  'status', 'date_of_join', 'can_access_app', 'address', 'emergency_contact', 'notes']
        widgets = {
            'first_name': forms.TextInput(attrs={'class': 'form-control', 'autofocus': True}),
            'last_name': forms.TextInput(attrs={'class': 'form-control'}),
            'email': forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'name@company.com'}),
            'phone': forms.TextInput(attrs={'class': 'form-control', 'dir': 'ltr'}),
            'department': forms.Select(attrs={'class': 'form-select'}),
            'role': forms.Select(attrs={'class': 'form-select'}),
            'sub_role': forms.TextInput(attrs={'class': 'form-control'}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'date_of_join': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'address': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'emergency_contact': forms.TextInput(attrs={'class': 'form-control'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
        }
        help_texts = {
            'can_access_app': 'Creates a Sales Associate login for this staff member',
        }

    def __init__(self, *args, **kwargs):
        self.client = kwargs.pop('client', None)
        super().__init__(*args, **kwargs)

        if self.client:
            self.fields['department'].queryset = Department.objects.filter(
                client=self.client, is_active=True).order_by('name')
        self.fields['department'].empty_label = 'No department'

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Row(Column('first_name', css_class='col-md-6'), Column('last_name', css_class='col-md-6')),
            Row(Column('email', css_class='col-md-6'), Column('phone', css_class='col-md-6')),
            Row(Column('department', css_class='col-md-4'), Column('role', css_class='col-md-4'),
                Column('status', css_class='col-md-4')),
            Row(Column('sub_role', css_class='col-md-6'), Column('date_of_join', css_class='col-md-6')),
            Field('can_access_app'),
            Field('password'),
            Field('address'),
            Field('emergency_contact'),
            Field('notes'),
            Submit('submit', 'Save Staff Member', css_class='btn btn-primary'),
        )

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()


class DepartmentForm(forms.ModelForm):
    class Meta:
        model = Department
        fields = ['name', 'code', 'description']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Front Office'}),
            'code': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'FO'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        self.client = kwargs.pop('client', None)
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'
        self.helper.layout = Layout(
            Field('name'),
            Field('code'),
            Field('description'),
            Submit('submit', 'Add Department', css_class='btn btn-primary'),
        )

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if self.client and Department.objects.filter(client=self.client, name__iexact=name).exists():
            raise forms.ValidationError('A department with this name already exists.')
        return name
