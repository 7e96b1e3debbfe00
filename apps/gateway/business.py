from .client import GatewayAPI


class BusinessAPI(GatewayAPI):

    def get_businesses(self, page=None, limit=None, search=None, status=None,
                       is_trialing=None, is_test_account=None, is_active=None):
        return self.api.get('/businesses', params={
            'page': page,
            'limit': limit,
            'search': search,
            'status': status,
            'isTrialing': is_trialing,
            'isTestAccount': is_test_account,
            'isActive': is_active,
        })

    def get_trial_businesses(self, page=None, limit=None, search=None, sort=None, is_test_account=None):
        return self.api.get('/businesses/trials', params={
            'page': page,
            'limit': limit,
            'search': search,
            'sort': sort,
            'isTestAccount': is_test_account,
        })

    def get_business_details(self, business_id):
        return self.api.get(f'/businesses/{business_id}')

    def update_business(self, business_id, update_data):
        return self.api.patch(f'/businesses/{business_id}', data=update_data)

    def update_business_capabilities(self, business_id, capabilities):
        return self.api.patch(f'/businesses/{business_id}/capabilities', data=capabilities)

    def update_employee_capabilities(self, employee_id, capabilities):
        return self.api.patch(f'/businesses/employee/{employee_id}/capabilities', data=capabilities)

    def update_employee(self, employee_id, update_data):
        return self.api.patch(f'/businesses/employee/{employee_id}', data=update_data)

    def activate_business(self, business_id):
        return self.api.patch(f'/businesses/{business_id}/activate')

    def deactivate_business(self, business_id):
        return self.api.patch(f'/businesses/{business_id}/deactivate')

    def update_test_account_status(self, business_id, is_test_account):
        return self.api.patch(f'/businesses/{business_id}/mark-test-account',
                              data={'isTestAccount': is_test_account})

    def soft_delete_business(self, business_id):
        return self.api.patch(f'/businesses/{business_id}/delete')

    def send_magic_link(self, email):
        return self.api.post('/magic-link/send', data={'email': email})


def create_business_api(api_key):
    return BusinessAPI(api_key)
