from .client import GatewayAPI


class CampaignsAPI(GatewayAPI):

    def get_campaigns(self, page=None, limit=None, search=None, status=None, type=None, sent=None):
        return self.api.get('/campaigns', params={
            'page': page,
            'limit': limit,
            'search': search,
            'status': status,
            'type': type,
            'sent': sent,
        })

    def get_campaign(self, campaign_id):
        return self.api.get(f'/campaigns/{campaign_id}')

    def sync_campaigns(self):
        return self.api.post('/campaigns/sync')

    def delete_campaign(self, campaign_id):
        return self.api.delete(f'/campaigns/{campaign_id}')


def create_campaigns_api(api_key):
    return CampaignsAPI(api_key)
