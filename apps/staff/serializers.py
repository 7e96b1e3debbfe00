from rest_framework import serializers

from apps.core.models import Client
from .models import Department, Staff, StaffCommunication


class DepartmentSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ['id', 'name']


class DepartmentSerializer(serializers.ModelSerializer):
    client_id = serializers.PrimaryKeyRelatedField(source='client', queryset=Client.objects.all())
    staff_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Department
        fields = ['id', 'client_id', 'name', 'code', 'description', 'is_active', 'staff_count',
                  'created_at', 'updated_at']
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']
        validators = []

    def validate(self, attrs):
        client = attrs.get('client')
        name = attrs.get('name')
        if client and name and Department.objects.filter(client=client, name__iexact=name).exists():
            raise serializers.ValidationError({'name': 'A department with this name already exists.'})
        return attrs


class StaffSerializer(serializers.ModelSerializer):
    client_id = serializers.PrimaryKeyRelatedField(source='client', queryset=Client.objects.all())
    department_id = serializers.PrimaryKeyRelatedField(
        source='department', queryset=Department.objects.all(), required=False, allow_null=True
    )
    department = DepartmentSummarySerializer(read_only=True)
    full_name = serializers.CharField(source='get_full_name', read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    password = serializers.CharField(write_only=True, required=False, allow_blank=True, min_length=8)

    class Meta:
        model = Staff
        fields = [
            'id', 'client_id', 'department_id', 'department',
            'first_name', 'last_name', 'full_name', 'email', 'phone', 'avatar', 'address',
            'emergency_contact', 'employee_id', 'role', 'sub_role', 'status', 'date_of_join',
            'performance_score', 'can_access_app', 'user_id', 'communication_preferences',
            'documents', 'notes', 'password', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'employee_id', 'avatar', 'created_at', 'updated_at']

    def validate_communication_preferences(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Expected an object like {"email": true, "sms": false}.')
        return value

    def validate(self, attrs):
        client = attrs.get('client')
        if self.instance is not None and client is not None and client != self.instance.client:
            raise serializers.ValidationError({'client_id': 'Staff cannot be moved to another client.'})

        client = client or getattr(self.instance, 'client', None)
        department = attrs.get('department')
        if department is not None and department.client_id != client.id:
            raise serializers.ValidationError({'department_id': 'Department belongs to another client.'})
        return attrs


class StaffCommunicationSerializer(serializers.ModelSerializer):
    staff_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = StaffCommunication
        fields = ['id', 'staff_id', 'type', 'subject', 'message', 'status', 'sent_at']
        read_only_fields = fields
