from .client import ClientCreate, ClientOut
from .court_date import CourtDateCreate, CourtDateApprove, CourtDateOut, EnrichedCourtDate, UpcomingCourtDate, OverdueCourtDate
from .reminder import ReminderConfirm, ReminderOut, DispatchSummaryOut, ScheduleSummaryOut
from .notification import NotificationOut, NotificationConfirm, NotificationMarkAllRead
