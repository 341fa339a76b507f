from app.crud.base import CRUDBase
from app.crud.user import user
from .compliance_question import compliance_question
from .onboarding import onboarding
from .user_response import user_response
from .compliance_item import compliance_item

__all__ = ["CRUDBase", "user", "compliance_question", "onboarding", "user_response", "compliance_item"]
