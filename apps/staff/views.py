import csv
import logging

import openpyxl
from openpyxl.styles import Font, PatternFill
from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db import transaction
from django.db.models import Avg, Count, Q
from django.http import HttpResponse
from django.shortcuts import render, redirect
from django.utils import timezone

from apps.accounts.decorators import client_required
from apps.core.utils import get_user_client
from .forms import DepartmentForm, StaffFilterForm, StaffForm
from .models import Department, Staff, StaffRole, StaffStatus
from .utils import app_user_exists, grant_app_access

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    'Employee ID', 'First Name', 'Last Name', 'Email', 'Phone',
    'Department', 'Role', 'Position', 'Status', 'Date of Join', 'App Access',
]


def _current_client_or_redirect(request):
    """(client, None) or (None, redirect) when an admin has not picked a client yet."""
    client = get_user_client(request)
    if client is None:
        messages.info(request, 'Select a client to manage first.')
        return None, redirect('core:client_selector')
    return client, None


def _page(request, queryset, per_page):
    paginator = Paginator(queryset, per_page)
    page_obj = paginator.get_page(request.GET.get('page', 1))
    return page_obj, {
        'page_obj': page_obj,
        'is_paginated': page_obj.has_other_pages(),
        'page_range': paginator.get_elided_page_range(page_obj.number, on_each_side=2, on_ends=1),
    }


@login_required
@client_required
def staff_list_view(request):
    client, response = _current_client_or_redirect(request)
    if response:
        return response

    staff_qs = Staff.objects.filter(client=client).select_related('department').order_by('-created_at')

    filter_form = StaffFilterForm(request.GET, client=client)
    staff_qs = filter_form.apply(staff_qs)

    status_counts = dict(
        Staff.objects.filter(client=client).values_list('status').order_by().annotate(count=Count('id'))
    )

    page_obj, pagination = _page(request, staff_qs, settings.STAFF_PAGE_SIZE)

    context = {
        'client': client,
        'staff_members': page_obj,
        'filter_form': filter_form,
        'total_count': staff_qs.count(),
        'status_counts': {status: status_counts.get(status, 0) for status in StaffStatus.values},
        'active_page': 'staff',
        **pagination,
    }

    return render(request, 'staff/staff_list.html', context)


@login_required
@client_required
def staff_create_view(request):
    client, response = _current_client_or_redirect(request)
    if response:
        return response

    if request.method == 'POST':
        form = StaffForm(request.POST, client=client)
        if form.is_valid():
            can_access_app = form.cleaned_data.get('can_access_app')
            password = form.cleaned_data.get('password')

            if can_access_app and password and app_user_exists(form.cleaned_data['email']):
                form.add_error('email', 'A user with this email already exists.')
            else:
                with transaction.atomic():
                    staff = form.save(commit=False)
                    staff.client = client
                    if can_access_app:
                        staff.sub_role = settings.STAFF_APP_SUB_ROLE
                    staff.save()

                    if can_access_app and password:
                        grant_app_access(staff, password)

                logger.info(f"Staff {staff.employee_id} created for {client.name} by {request.user.email}")
                messages.success(request, f'{staff.get_full_name()} added successfully.')
                return redirect('staff:staff_list')

        messages.error(request, 'Please correct the errors below.')
    else:
        form = StaffForm(client=client)

    context = {
        'client': client,
        'form': form,
        'active_page': 'staff',
    }

    return render(request, 'staff/staff_form.html', context)


@login_required
@client_required
def sales_team_view(request):
    client, response = _current_client_or_redirect(request)
    if response:
        return response

    sales_qs = Staff.objects.filter(client=client, role=StaffRole.SALES).select_related('department')

    search = request.GET.get('search', '').strip()
    if search:
        sales_qs = sales_qs.filter(
            Q(first_name__icontains=search) |
            Q(last_name__icontains=search) |
            Q(email__icontains=search) |
            Q(phone__icontains=search)
        )

    position = request.GET.get('position', 'all')
    if position != 'all':
        sales_qs = sales_qs.filter(sub_role=position)

    status = request.GET.get('status', 'all')
    if status != 'all':
        sales_qs = sales_qs.filter(status=status)

    stats = Staff.objects.filter(
        client=client, role=StaffRole.SALES, status=StaffStatus.ACTIVE
    ).aggregate(active=Count('id'), avg_performance=Avg('performance_score'))

    positions = (
        Staff.objects.filter(client=client, role=StaffRole.SALES)
        .exclude(sub_role='')
        .values_list('sub_role', flat=True)
        .distinct()
        .order_by('sub_role')
    )

    page_obj, pagination = _page(request, sales_qs.order_by('-created_at'), settings.STAFF_PAGE_SIZE)

    context = {
        'client': client,
        'sales_team': page_obj,
        'search_query': search,
        'position': position,
        'status': status,
        'positions': positions,
        'statuses': StaffStatus.choices,
        'active_associates': stats['active'],
        'avg_performance': stats['avg_performance'] or 0,
        'active_page': 'sales_team',
        **pagination,
    }

    return render(request, 'staff/sales_team.html', context)


@login_required
@client_required
def department_list_view(request):
    client, response = _current_client_or_redirect(request)
    if response:
        return response

    if request.method == 'POST':
        form = DepartmentForm(request.POST, client=client)
        if form.is_valid():
            department = form.save(commit=False)
            department.client = client
            department.save()
            messages.success(request, f'Department "{department.name}" created.')
            return redirect('staff:department_list')
        messages.error(request, 'Please correct the errors below.')
    else:
        form = DepartmentForm(client=client)

    departments = (
        Department.objects.filter(client=client, is_active=True)
        .annotate(staff_count=Count('staff'))
        .order_by('name')
    )

    context = {
        'client': client,
        'departments': departments,
        'form': form,
        'active_page': 'departments',
    }

    return render(request, 'staff/department_list.html', context)


def _export_row(staff):
    return [
        staff.employee_id,
        staff.first_name,
        staff.last_name,
        staff.email,
        staff.phone,
        staff.department.name if staff.department else '',
        staff.get_role_display(),
        staff.sub_role,
        staff.get_status_display(),
        staff.date_of_join.strftime('%Y-%m-%d') if staff.date_of_join else '',
        'Yes' if staff.can_access_app else 'No',
    ]


@login_required
@client_required
def staff_export_view(request):
    client, response = _current_client_or_redirect(request)
    if response:
        return response

    export_format = request.GET.get('format', 'excel')
    staff_qs = StaffFilterForm(request.GET, client=client).apply(
        Staff.objects.filter(client=client).select_related('department').order_by('-created_at')
    )
    filename = f'staff_{timezone.now().strftime("%Y%m%d_%H%M%S")}'

    if export_format == 'excel':
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Staff"

        for col, header in enumerate(EXPORT_HEADERS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color="667eea", end_color="667eea", fill_type="solid")

        for row, staff in enumerate(staff_qs, start=2):
            for col, value in enumerate(_export_row(staff), start=1):
                ws.cell(row=row, column=col, value=value)

        # Adjust column widths
        for col in ws.columns:
            max_length = max(len(str(cell.value or '')) for cell in col)
            ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

        response = HttpResponse(
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        response['Content-Disposition'] = f'attachment; filename="{filename}.xlsx"'
        wb.save(response)
        return response

    elif export_format == 'csv':
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}.csv"'

        # Write BOM for Excel UTF-8 compatibility
        response.write('\ufeff')

        writer = csv.writer(response)
        writer.writerow(EXPORT_HEADERS)
        for staff in staff_qs:
            writer.writerow(_export_row(staff))
        return response

    messages.error(request, 'Invalid export format')
    return redirect('staff:staff_list')
