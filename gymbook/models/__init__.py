from .user import UserRole, User, session_bookings
from .gym import Gym
from .gym_admin import GymAdmin, gym_admin_gyms
from .training_session import TrainingSession
from .subscription import SubscriptionPackage, Subscription
from .payment import PaymentStatus, Payment
from .announcement import Announcement
