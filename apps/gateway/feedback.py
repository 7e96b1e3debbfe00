from .client import GatewayAPI


class FeedbackAPI(GatewayAPI):
    """VenueBoost guest feedback."""

    def get_feedback(self, page=None, limit=None, search=None):
        return self.api.get('/vb/feedback', params={'page': page, 'limit': limit, 'search': search})

    def get_feedback_by_id(self, feedback_id):
        return self.api.get(f'/vb/feedback/{feedback_id}')

    def get_feedback_stats(self):
        return self.api.get('/vb/feedback/stats')


def create_feedback_api(api_key):
    return FeedbackAPI(api_key)
