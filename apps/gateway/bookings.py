from .client import GatewayAPI


class BookingsAPI(GatewayAPI):

    def get_bookings(self, page=None, limit=None, search=None, sort=None, status=None,
                     property_id=None, from_date=None, to_date=None):
        return self.api.get('/bookings', params={
            'page': page,
            'limit': limit,
            'search': search,
            'sort': sort,
            'status': status,
            'propertyId': property_id,
            'fromDate': from_date,
            'toDate': to_date,
        })

    def get_booking(self, booking_id):
        return self.api.get(f'/bookings/{booking_id}')

    def sync_bookings(self):
        return self.api.post('/bookings/sync')

    def delete_booking(self, booking_id):
        return self.api.delete(f'/bookings/{booking_id}')


def create_bookings_api(api_key):
    return BookingsAPI(api_key)
