from .client import GatewayAPI


class AgentsAPI(GatewayAPI):

    def get_business_agents(self, business_id):
        return self.api.get(f'/agent-configuration/business/{business_id}')

    def get_agent_configuration(self, business_id, agent_type):
        return self.api.get(f'/agent-configuration/business/{business_id}/agent/{agent_type}')

    def enable_agent(self, client_id, business_id, agent_type):
        return self.api.post(
            f'/agent-configuration/client/{client_id}/business/{business_id}/agent/{agent_type}/enable'
        )

    def disable_agent(self, business_id, agent_type):
        return self.api.post(f'/agent-configuration/business/{business_id}/agent/{agent_type}/disable')

    def update_agent_configuration(self, business_id, agent_type, config_data):
        return self.api.put(
            f'/agent-configuration/business/{business_id}/agent/{agent_type}/configuration',
            data=config_data,
        )


def create_agents_api(api_key):
    return AgentsAPI(api_key)
