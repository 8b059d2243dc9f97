from .user import User
from .job import Job
from .application import Application
from .application_stage import ApplicationStage
from .interview import Interview
from .interview_feedback import InterviewFeedback
from .notification import Notification
from .status_override import StatusOverride
# base and mixins are imported by the above as needed
