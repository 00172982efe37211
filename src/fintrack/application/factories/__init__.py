from fintrack.application.factories.gateway_factory import GatewayFactory

__all__ = ["GatewayFactory"]
