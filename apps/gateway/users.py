from .client import GatewayAPI


class UsersAPI(GatewayAPI):

    def connect_store(self, user_id, store_id):
        return self.api.post('/users/connect-store', data={'userId': str(user_id), 'storeId': store_id})


def create_users_api(api_key):
    return UsersAPI(api_key)
