from .client import GatewayAPI


class ReportsAPI(GatewayAPI):

    def get_reports(self, page=None, limit=None, skip=None, status=None, client_app_id=None,
                    search=None, from_date=None, to_date=None, priority=None):
        """
        List reports. The gateway pages with skip/limit, so page+limit is
        converted: page 3 with limit 10 becomes skip 20.
        """
        if page is not None and limit is not None:
            skip = (int(page) - 1) * int(limit)

        return self.api.get('/reports', params={
            'skip': skip,
            'limit': limit,
            'status': status,
            'clientAppId': client_app_id,
            'search': search,
            'fromDate': from_date,
            'toDate': to_date,
            'priority': priority,
        })

    def get_report(self, report_id):
        return self.api.get(f'/reports/{report_id}')

    def update_report_status(self, report_id, status):
        return self.api.patch(f'/reports/{report_id}/status', data={'status': status})

    def update_report(self, report_id, report_data):
        return self.api.put(f'/reports/{report_id}', data=report_data)

    def delete_report(self, report_id):
        return self.api.delete(f'/reports/{report_id}')

    def get_reports_summary(self, client_app_id=None):
        return self.api.get('/reports/summary', params={'clientAppId': client_app_id})


def create_reports_api(api_key):
    return ReportsAPI(api_key)
