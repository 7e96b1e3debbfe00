from .client import GatewayAPI


class SubscriptionsAPI(GatewayAPI):

    def get_subscriptions(self, page=None, limit=None, search=None, status=None):
        return self.api.get('/subscriptions', params={
            'page': page, 'limit': limit, 'search': search, 'status': status,
        })

    def get_active_subscriptions(self, page=None, limit=None, search=None):
        return self.get_subscriptions(page=page, limit=limit, search=search, status='active')

    def get_past_due_subscriptions(self, page=None, limit=None, search=None):
        return self.get_subscriptions(page=page, limit=limit, search=search, status='past_due')

    def get_canceled_subscriptions(self, page=None, limit=None, search=None):
        return self.get_subscriptions(page=page, limit=limit, search=search, status='canceled')

    def get_subscription_details(self, subscription_id):
        return self.api.get(f'/subscriptions/{subscription_id}')

    def update_subscription(self, subscription_id, update_data):
        return self.api.put(f'/subscriptions/{subscription_id}', data=update_data)

    def cancel_subscription(self, subscription_id, cancel_at_period_end=True, reason=None):
        payload = {'cancelAtPeriodEnd': cancel_at_period_end}
        if reason:
            payload['reason'] = reason
        return self.api.post(f'/subscriptions/{subscription_id}/cancel', data=payload)


def create_subscriptions_api(api_key):
    return SubscriptionsAPI(api_key)
