from .client import GatewayAPI


class SyncHistoryAPI(GatewayAPI):
    """Staffluent superadmin views of cron runs and background assignment."""

    def get_cron_job_history(self, page=None, limit=None, status=None, job_name=None, business_id=None):
        return self.api.get('/staffluent-superadmin/cron-history', params={
            'page': page,
            'limit': limit,
            'status': status,
            'jobName': job_name,
            'businessId': business_id,
        })

    def get_cron_job_stats(self, days=None):
        return self.api.get('/staffluent-superadmin/cron-stats', params={'days': days})

    def get_task_stats(self):
        return self.api.get('/staffluent-superadmin/task-stats')

    def get_employee_stats(self):
        return self.api.get('/staffluent-superadmin/employee-stats')

    def get_auto_assign_stats(self, days=None):
        return self.api.get('/staffluent-superadmin/auto-assignment-stats', params={'days': days})

    def get_business_details(self, business_id, days=None):
        return self.api.get(f'/staffluent-superadmin/business/{business_id}', params={'days': days})

    def get_weather_monitoring_stats(self, days=None):
        return self.api.get('/staffluent-superadmin/weather-monitoring', params={'days': days})


def create_sync_history_api(api_key):
    return SyncHistoryAPI(api_key)
