from django.utils import timezone

from .client import GatewayAPI


class StaffluentDashboardAPI(GatewayAPI):

    def get_dashboard_summary(self):
        return self.api.get('/staffluent-dashboard/summary')

    def get_business_analytics(self, period=None):
        return self.api.get('/staffluent-analytics/businesses', params={'period': period})

    def get_user_analytics(self, period=None):
        return self.api.get('/staffluent-analytics/users', params={'period': period})


class QytetaretDashboardAPI(GatewayAPI):
    """Community report statistics for the Qytetaret citizen app."""

    def get_dashboard_stats(self):
        return self.api.get('/community-reports/dashboard-stats')

    def get_reports_by_category(self):
        return self.api.get('/community-reports/stats/by-category')

    def get_monthly_report_trends(self, year=None):
        return self.api.get('/community-reports/stats/monthly',
                            params={'year': year or timezone.now().year})

    def get_reports_by_status(self):
        return self.api.get('/community-reports/stats/by-status')

    def get_top_report_locations(self, limit=5):
        return self.api.get('/community-reports/stats/top-locations', params={'limit': limit})

    def get_recent_reports(self, limit=5):
        return self.api.get('/community-reports/stats/recent', params={'limit': limit})

    def get_citizen_engagement_metrics(self):
        return self.api.get('/community-reports/engagement-metrics')


def create_staffluent_dashboard_api(api_key):
    return StaffluentDashboardAPI(api_key)


def create_qytetaret_dashboard_api(api_key):
    return QytetaretDashboardAPI(api_key)
