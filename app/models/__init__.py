from .project import Project
from .user import User
from .report import Report
from .audit import AuditRecord
from .sequence import HistorySequence

# register every model here so Base.metadata sees it
