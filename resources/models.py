"""
Marketing Platform Entity Models

Entities mirrored by the console. Related records may arrive either
populated (an object) or as a bare id, so relation fields are left loose.
"""

from typing import Optional, Dict, Any, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from enum import Enum

from datasync.models import SyncItem


# Enums
class Role(str, Enum):
    """User role"""
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    CONTRIBUTOR = "CONTRIBUTOR"
    VIEWER = "VIEWER"


class ChannelType(str, Enum):
    """Publishing channel"""
    INSTAGRAM = "INSTAGRAM"
    TIKTOK = "TIKTOK"
    FACEBOOK = "FACEBOOK"
    PINTEREST = "PINTEREST"
    X = "X"
    YOUTUBE = "YOUTUBE"


class CampaignStatus(str, Enum):
    """Campaign status"""
    UPCOMING = "UPCOMING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class PostStatus(str, Enum):
    """Post status"""
    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    POSTED = "POSTED"
    ARCHIVED = "ARCHIVED"


class TaskStatus(str, Enum):
    """Task status"""
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    BLOCKED = "BLOCKED"
    DONE = "DONE"
    TRASH = "TRASH"


class TaskPriority(str, Enum):
    """Task priority"""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class GoalType(str, Enum):
    """Goal type"""
    ENGAGEMENT = "ENGAGEMENT"
    SALES = "SALES"
    REACH = "REACH"
    CONVERSIONS = "CONVERSIONS"
    AWARENESS = "AWARENESS"


class GoalStatus(str, Enum):
    """Goal status"""
    UPCOMING = "UPCOMING"
    ACTIVE = "ACTIVE"
    AT_RISK = "AT_RISK"
    OFF_TRACK = "OFF_TRACK"
    COMPLETE = "COMPLETE"


class AssetKind(str, Enum):
    """Asset kind"""
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOC = "DOC"
    TEMPLATE = "TEMPLATE"
    GUIDELINE = "GUIDELINE"


class ActivityType(str, Enum):
    """Activity type"""
    POST = "POST"
    AD = "AD"
    AMBASSADOR_TASK = "AMBASSADOR_TASK"


# Nested value objects
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class ChecklistItem(_CamelModel):
    """Task checklist entry"""
    id: Optional[str] = None
    text: str = ""
    completed: bool = False


class PostMetrics(_CamelModel):
    """Post performance metrics"""
    reach: int = 0
    impressions: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0
    clicks: int = 0
    engagement_rate: float = 0.0


class AmbassadorMetrics(_CamelModel):
    """Ambassador totals"""
    total_posts: int = 0
    total_reach: int = 0
    total_engagement: int = 0
    average_engagement_rate: float = 0.0


class ActivityMetrics(_CamelModel):
    """Activity metrics (all optional)"""
    reach: Optional[int] = None
    impressions: Optional[int] = None
    likes: Optional[int] = None
    comments: Optional[int] = None
    shares: Optional[int] = None
    saves: Optional[int] = None
    clicks: Optional[int] = None
    conversions: Optional[int] = None
    spend_cents: Optional[int] = None
    revenue_cents: Optional[int] = None


# Entities
class User(SyncItem):
    """Console user"""
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None
    avatar: Optional[str] = None


class Campaign(SyncItem):
    """Marketing campaign"""
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[CampaignStatus] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    budget_cents: Optional[int] = None
    spent_cents: Optional[int] = None
    channels: List[ChannelType] = Field(default_factory=list)
    goals: List[Any] = Field(default_factory=list)
    activities: List[Any] = Field(default_factory=list)
    created_by: Optional[Any] = None


class Post(SyncItem):
    """Social post"""
    title: Optional[str] = None
    caption: Optional[str] = None
    hashtags: List[str] = Field(default_factory=list)
    platform_hashtags: Dict[str, List[str]] = Field(default_factory=dict)
    notes: Optional[str] = None
    status: Optional[PostStatus] = None
    scheduled_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    platform: Optional[ChannelType] = None
    attachments: List[Any] = Field(default_factory=list)
    campaign: Optional[Any] = None
    goal: Optional[Any] = None
    metrics: Optional[PostMetrics] = None
    created_by: Optional[Any] = None


class Task(SyncItem):
    """Task, the only soft-deletable entity"""
    title: Optional[str] = None
    description: Optional[str] = None
    due: Optional[datetime] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assignees: List[Any] = Field(default_factory=list)
    related_post: Optional[Any] = None
    related_campaign: Optional[Any] = None
    checklist: List[ChecklistItem] = Field(default_factory=list)

    # Trash
    trashed: bool = False
    trashed_by: Optional[Any] = None
    trashed_at: Optional[datetime] = None
    restore_status: Optional[TaskStatus] = None

    start_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None


class Goal(SyncItem):
    """Measurable campaign goal"""
    title: Optional[str] = None
    type: Optional[GoalType] = None
    target_value: Optional[float] = None
    target_unit: Optional[str] = None
    current_value: Optional[float] = None
    baseline_value: Optional[float] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    status: Optional[GoalStatus] = None
    owner: Optional[Any] = None
    campaigns: List[Any] = Field(default_factory=list)


class Asset(SyncItem):
    """Uploaded creative asset"""
    name: Optional[str] = None
    url: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    kind: Optional[AssetKind] = None
    uploaded_by: Optional[Any] = None
    campaign: Optional[Any] = None
    post: Optional[Any] = None
    goal: Optional[Any] = None


class Ambassador(SyncItem):
    """Brand ambassador"""
    name: Optional[str] = None
    handle: Optional[str] = None
    platform_handles: Dict[str, str] = Field(default_factory=dict)
    platforms: List[ChannelType] = Field(default_factory=list)
    email: Optional[str] = None
    phone: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    avatar: Optional[str] = None
    metrics: Optional[AmbassadorMetrics] = None
    tracking_config: Optional[Dict[str, Any]] = None


class Activity(SyncItem):
    """Campaign activity (post, ad or ambassador task)"""
    type: Optional[ActivityType] = None
    campaign: Optional[Any] = None
    goal: Optional[Any] = None
    ambassador: Optional[Any] = None
    post: Optional[Any] = None
    metrics: Optional[ActivityMetrics] = None
