from .client import GatewayAPI


class TicketsAPI(GatewayAPI):

    def get_tickets(self, page=None, limit=None, search=None, status=None, priority=None,
                    category=None, assigned_to=None, business_id=None, from_date=None, to_date=None):
        return self.api.get('/tickets/support', params={
            'page': page,
            'limit': limit,
            'search': search,
            'status': status,
            'priority': priority,
            'category': category,
            'assignedTo': assigned_to,
            'businessId': business_id,
            'fromDate': from_date,
            'toDate': to_date,
        })

    def get_ticket_stats(self):
        return self.api.get('/tickets/support/stats')

    def get_ticket(self, ticket_id):
        return self.api.get(f'/tickets/support/{ticket_id}')

    def update_ticket(self, ticket_id, update_data):
        return self.api.put(f'/tickets/support/{ticket_id}', data=update_data)

    def add_message(self, ticket_id, message_data):
        return self.api.post(f'/tickets/support/{ticket_id}/messages', data=message_data)

    def delete_ticket(self, ticket_id):
        return self.api.delete(f'/tickets/support/{ticket_id}')


def create_tickets_api(api_key):
    return TicketsAPI(api_key)
