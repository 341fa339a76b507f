from app.services.onboarding import onboarding_service
from app.services.dashboard import dashboard_service
from .auth import PasswordAuthGateway, DemoAuthGateway

__all__ = ["onboarding_service", "dashboard_service", "PasswordAuthGateway", "DemoAuthGateway"]
