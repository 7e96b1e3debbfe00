from .client import GatewayAPI


class MembersAPI(GatewayAPI):
    """VenueBoost club members."""

    def get_members(self, page=None, limit=None, search=None, status=None, registration_source=None):
        return self.api.get('/vb/members', params={
            'page': page,
            'limit': limit,
            'search': search,
            'status': status,
            'registration_source': registration_source,
        })

    def approve_member(self, member_id):
        return self.api.post(f'/vb/members/{member_id}/approve')

    def reject_member(self, member_id, reason=None):
        return self.api.post(f'/vb/members/{member_id}/reject', data={'rejection_reason': reason})

    def export_members(self, registration_source=None):
        return self.api.get('/vb/members/export', params={'registration_source': registration_source})


def create_members_api(api_key):
    return MembersAPI(api_key)
