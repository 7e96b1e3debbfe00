from .client import GatewayAPI


class GuestsAPI(GatewayAPI):

    def get_guests(self, page=None, limit=None, search=None, status=None, sort=None):
        return self.api.get('/guests', params={
            'page': page, 'limit': limit, 'search': search, 'status': status, 'sort': sort,
        })

    def search_guests(self, query):
        return self.api.get('/guests/search', params={'query': query})

    def delete_guest(self, guest_id, force_delete=False, delete_user=False):
        return self.api.delete(f'/guests/{guest_id}', params={
            'forceDelete': bool(force_delete),
            'deleteUser': bool(delete_user),
        })


def create_guests_api(api_key):
    return GuestsAPI(api_key)
