from .client import GatewayAPI


class AdminSubscriptionAPI(GatewayAPI):

    def register_and_subscribe_business(self, data):
        """
        Register a business with its admin user and start its subscription.

        `data` carries businessName, businessEmail, businessType, fullName,
        planId, interval and an optional trial/coupon; the gateway returns
        the created business, user and subscription.
        """
        return self.api.post('/admin-subscription/admin-register', data=data)


def create_admin_subscription_api(api_key):
    return AdminSubscriptionAPI(api_key)
