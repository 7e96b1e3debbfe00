from .client import GatewayAPI


class FeaturesAPI(GatewayAPI):

    def get_feature_config(self):
        return self.api.get('/admin/features/config')

    def get_business_features(self, business_id):
        return self.api.get(f'/admin/features/business/{business_id}')

    def add_custom_feature(self, business_id, feature_key):
        return self.api.post(f'/admin/features/business/{business_id}/custom-feature',
                             data={'featureKey': feature_key})

    def remove_custom_feature(self, business_id, feature_key):
        return self.api.delete(f'/admin/features/business/{business_id}/custom-feature/{feature_key}')

    def set_custom_limit(self, business_id, limit_key, value):
        return self.api.post(f'/admin/features/business/{business_id}/custom-limit',
                             data={'limitKey': limit_key, 'value': value})

    def remove_custom_limit(self, business_id, limit_key):
        return self.api.delete(f'/admin/features/business/{business_id}/custom-limit/{limit_key}')


def create_features_api(api_key):
    return FeaturesAPI(api_key)
