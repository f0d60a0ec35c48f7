from .auth import AuthFlow
from .mission_list import MissionListPage
from .mission_detail import MissionDetailPage

__all__ = ["AuthFlow", "MissionListPage", "MissionDetailPage"]
