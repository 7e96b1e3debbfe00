from .client import GatewayAPI


class LoyaltyAPI(GatewayAPI):

    def get_loyalty_program(self):
        return self.api.get('/loyalty')

    def update_loyalty_program(self, program_data):
        return self.api.put('/loyalty', data=program_data)

    def disable_loyalty_program(self):
        return self.api.delete('/loyalty')


def create_loyalty_api(api_key):
    return LoyaltyAPI(api_key)
