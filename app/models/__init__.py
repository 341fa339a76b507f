from .compliance_item import ComplianceItem
from .compliance_question import ComplianceQuestion
from .onboarding import OnboardingSession
from .profile import Profile
from .user import User
from .user_response import UserResponse
