# torneo_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Teams and categories
from .team_model import Team, Category

# Rounds
from .round_model import Round

# Players
from .player_model import Player

# Matches and embedded stats
from .match_model import Match, MatchStats, ScorerTally

# Users, credentials and sessions
from .user_model import User, Account, AuthSession

# Notifications
from .notification_model import Notification, NotificationType

# Request schemas
from .requests import (
    RegisterRequest, LoginRequest, TeamCreate, RoundCreate, MatchCreate,
    MatchResultUpdate, GoalAdjustment, PlayerCreate, NotificationCreate,
    ChangeRole, AssignTeam, UserUpdateRequest,
)
