from .client import Client
from .court_date import CourtDate
from .notification import Notification, NotificationType, NotificationPriority
from .reminder import CourtDateReminder
