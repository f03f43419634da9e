"""
Pydantic models for the Bungie.net API contracts.

The envelope and the OAuth token response are the only shapes the client
pipeline itself depends on. The remaining models cover the request bodies
and payloads of the bundled endpoints; they accept unknown fields so that
additions on the remote side do not break validation. Wire names are kept
exactly as the API sends them through aliases.
"""

import enum
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_pascal

T = TypeVar("T")


# --- Enumerations ---

class PlatformErrorCode(enum.IntEnum):
    """The commonly seen subset of the API's ``ErrorCode`` values."""

    NONE = 0
    SUCCESS = 1
    TRANSPORT_EXCEPTION = 2
    UNHANDLED_EXCEPTION = 3
    NOT_IMPLEMENTED = 4
    SYSTEM_DISABLED = 5
    PARAMETER_PARSE_FAILURE = 7
    PARAMETER_INVALID_RANGE = 8
    BAD_REQUEST = 9
    AUTHENTICATION_INVALID = 10
    DATA_NOT_FOUND = 11
    INSUFFICIENT_PRIVILEGES = 12
    THROTTLE_LIMIT_EXCEEDED = 31
    THROTTLE_LIMIT_EXCEEDED_MINUTES = 32
    THROTTLE_LIMIT_EXCEEDED_MOMENTARILY = 33
    THROTTLE_LIMIT_EXCEEDED_SECONDS = 34
    PER_ENDPOINT_REQUEST_THROTTLE_EXCEEDED = 51
    WEB_AUTH_REQUIRED = 99
    DESTINY_ACCOUNT_NOT_FOUND = 1601
    DESTINY_UNEXPECTED_ERROR = 1618
    DESTINY_CHARACTER_NOT_FOUND = 1620
    DESTINY_ITEM_NOT_FOUND = 1623
    DESTINY_PRIVACY_RESTRICTION = 1665
    DESTINY_THROTTLED_BY_GAME_SERVER = 1672
    ACCESS_TOKEN_HAS_EXPIRED = 2111


THROTTLE_ERROR_CODES = frozenset({
    PlatformErrorCode.THROTTLE_LIMIT_EXCEEDED,
    PlatformErrorCode.THROTTLE_LIMIT_EXCEEDED_MINUTES,
    PlatformErrorCode.THROTTLE_LIMIT_EXCEEDED_MOMENTARILY,
    PlatformErrorCode.THROTTLE_LIMIT_EXCEEDED_SECONDS,
    PlatformErrorCode.PER_ENDPOINT_REQUEST_THROTTLE_EXCEEDED,
    PlatformErrorCode.DESTINY_THROTTLED_BY_GAME_SERVER,
})


class BungieMembershipType(enum.IntEnum):
    NONE = 0
    TIGER_XBOX = 1
    TIGER_PSN = 2
    TIGER_STEAM = 3
    TIGER_BLIZZARD = 4
    TIGER_STADIA = 5
    TIGER_EGS = 6
    TIGER_DEMON = 10
    BUNGIE_NEXT = 254
    # Only valid for searches; lookups need the concrete platform.
    ALL = -1


class DestinyComponentType(enum.IntEnum):
    """Component groups that can be requested from profile-style endpoints."""

    NONE = 0
    PROFILES = 100
    VENDOR_RECEIPTS = 101
    PROFILE_INVENTORIES = 102
    PROFILE_CURRENCIES = 103
    PROFILE_PROGRESSION = 104
    PLATFORM_SILVER = 105
    CHARACTERS = 200
    CHARACTER_INVENTORIES = 201
    CHARACTER_PROGRESSIONS = 202
    CHARACTER_RENDER_DATA = 203
    CHARACTER_ACTIVITIES = 204
    CHARACTER_EQUIPMENT = 205
    ITEM_INSTANCES = 300
    ITEM_OBJECTIVES = 301
    ITEM_PERKS = 302
    ITEM_RENDER_DATA = 303
    ITEM_STATS = 304
    ITEM_SOCKETS = 305
    ITEM_TALENT_GRIDS = 306
    ITEM_COMMON_DATA = 307
    ITEM_PLUG_STATES = 308
    ITEM_PLUG_OBJECTIVES = 309
    ITEM_REUSABLE_PLUGS = 310
    VENDORS = 400
    VENDOR_CATEGORIES = 401
    VENDOR_SALES = 402
    KIOSKS = 500
    CURRENCY_LOOKUPS = 600
    PRESENTATION_NODES = 700
    COLLECTIBLES = 800
    RECORDS = 900
    TRANSITORY = 1000
    METRICS = 1100
    STRING_VARIABLES = 1200
    CRAFTABLES = 1300


class DestinyActivityModeType(enum.IntEnum):
    NONE = 0
    STORY = 2
    STRIKE = 3
    RAID = 4
    ALL_PVP = 5
    PATROL = 6
    ALL_PVE = 7
    CONTROL = 10
    CLASH = 12
    NIGHTFALL = 16
    IRON_BANNER = 19
    TRIALS_OF_OSIRIS = 84
    DUNGEON = 82
    GAMBIT = 63


class GroupType(enum.IntEnum):
    GENERAL = 0
    CLAN = 1


class GroupsForMemberFilter(enum.IntEnum):
    ALL = 0
    FOUNDED = 1
    NON_FOUNDED = 2


class RuntimeGroupMemberType(enum.IntEnum):
    NONE = 0
    BEGINNER = 1
    MEMBER = 2
    ADMIN = 3
    ACTING_FOUNDER = 4
    FOUNDER = 5


# --- Envelope ---

class BungieApiResponse(BaseModel, Generic[T]):
    """
    The wrapper every Platform endpoint nests its payload in.

    ``response`` is only meaningful when ``error_code`` is ``SUCCESS``.
    """

    model_config = ConfigDict(populate_by_name=True)

    response: Optional[T] = Field(None, alias="Response")
    error_code: int = Field(alias="ErrorCode")
    throttle_seconds: int = Field(0, alias="ThrottleSeconds")
    error_status: Optional[str] = Field("", alias="ErrorStatus")
    message: Optional[str] = Field("", alias="Message")
    message_data: Dict[str, Any] = Field(default_factory=dict, alias="MessageData")
    detailed_error_trace: Optional[str] = Field(None, alias="DetailedErrorTrace")

    @property
    def is_success(self) -> bool:
        return self.error_code == PlatformErrorCode.SUCCESS


class BungieTokenResponse(BaseModel):
    """Response of the OAuth token endpoint. Not enveloped."""

    access_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    refresh_expires_in: Optional[int] = None
    membership_id: Optional[int] = None
    error: Optional[str] = None
    error_description: Optional[str] = None


# --- Shared configuration for DTOs ---

class BungieModel(BaseModel):
    """Base for camelCase contracts; unknown fields are kept."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class PascalModel(BaseModel):
    """Base for the few contracts the API sends in PascalCase."""

    model_config = ConfigDict(
        alias_generator=to_pascal, populate_by_name=True, extra="allow"
    )


# --- Request bodies ---

class DestinyItemActionRequest(BungieModel):
    item_id: int
    character_id: int
    membership_type: BungieMembershipType


class DestinyItemSetActionRequest(BungieModel):
    item_ids: List[int] = []
    character_id: int
    membership_type: BungieMembershipType


class DestinyItemStateRequest(BungieModel):
    state: bool
    item_id: int
    character_id: int
    membership_type: BungieMembershipType


class DestinyItemTransferRequest(BungieModel):
    item_reference_hash: int
    stack_size: int
    transfer_to_vault: bool
    item_id: int
    character_id: int
    membership_type: BungieMembershipType


class DestinyPostmasterTransferRequest(BungieModel):
    item_reference_hash: int
    stack_size: int
    item_id: int
    character_id: int
    membership_type: BungieMembershipType


class ExactSearchRequest(BungieModel):
    display_name: str
    display_name_code: int


class UserSearchPrefixRequest(BungieModel):
    display_name_prefix: str


class GroupNameSearchRequest(BungieModel):
    group_name: str
    group_type: GroupType = GroupType.CLAN


# --- Payloads ---

class StreamInfo(PascalModel):
    channel_name: Optional[str] = None


class GlobalAlert(PascalModel):
    alert_key: Optional[str] = None
    alert_html: Optional[str] = None
    alert_timestamp: Optional[datetime] = None
    alert_link: Optional[str] = None
    alert_level: int = 0
    alert_type: int = 0
    stream_info: Optional[StreamInfo] = None


class CoreSystem(BungieModel):
    enabled: bool
    parameters: Optional[Dict[str, str]] = None


class CoreSettingsConfiguration(BungieModel):
    environment: Optional[str] = None
    systems: Dict[str, CoreSystem] = {}
    ignore_reasons: List[Dict[str, Any]] = []
    forum_categories: List[Dict[str, Any]] = []
    group_avatars: List[Dict[str, Any]] = []
    destiny_membership_types: List[Dict[str, Any]] = []


class UserInfoCard(BungieModel):
    """Public identity of one platform membership."""

    supplemental_display_name: Optional[str] = None
    icon_path: Optional[str] = None
    cross_save_override: BungieMembershipType = BungieMembershipType.NONE
    applicable_membership_types: Optional[List[BungieMembershipType]] = None
    is_public: bool = False
    membership_type: BungieMembershipType
    membership_id: int
    display_name: Optional[str] = None
    bungie_global_display_name: Optional[str] = None
    bungie_global_display_name_code: Optional[int] = None


class GeneralUser(BungieModel):
    membership_id: int
    unique_name: Optional[str] = None
    display_name: Optional[str] = None
    profile_picture_path: Optional[str] = None
    about: Optional[str] = None
    first_access: Optional[datetime] = None
    last_update: Optional[datetime] = None
    locale: Optional[str] = None
    cached_bungie_global_display_name: Optional[str] = None
    cached_bungie_global_display_name_code: Optional[int] = None


class UserMembershipData(BungieModel):
    destiny_memberships: List[UserInfoCard] = []
    primary_membership_id: Optional[int] = None
    bungie_net_user: Optional[GeneralUser] = None


class UserSearchResponseDetail(BungieModel):
    bungie_global_display_name: Optional[str] = None
    bungie_global_display_name_code: Optional[int] = None
    bungie_net_membership_id: Optional[int] = None
    destiny_memberships: List[UserInfoCard] = []


class UserSearchResponse(BungieModel):
    search_results: List[UserSearchResponseDetail] = []
    page: int = 0
    has_more: bool = False


class DestinyManifest(BungieModel):
    version: Optional[str] = None
    mobile_asset_content_path: Optional[str] = None
    mobile_world_content_paths: Dict[str, str] = {}
    json_world_content_paths: Dict[str, str] = {}
    json_world_component_content_paths: Dict[str, Dict[str, str]] = {}
    mobile_clan_banner_database_path: Optional[str] = None
    mobile_gear_cdn: Dict[str, str] = Field(
        default_factory=dict, alias="mobileGearCDN"
    )


class DestinyLinkedProfilesResponse(BungieModel):
    profiles: List[Dict[str, Any]] = []
    bnet_membership: Optional[UserInfoCard] = None
    profiles_with_errors: List[Dict[str, Any]] = []


# Component payloads are kept as raw JSON objects; see the Bungie.net
# documentation for the shape of each component.
ComponentResponse = Dict[str, Any]


class DestinyProfileResponse(BungieModel):
    response_minted_timestamp: Optional[datetime] = None
    secondary_components_minted_timestamp: Optional[datetime] = None
    profile: Optional[ComponentResponse] = None
    profile_inventory: Optional[ComponentResponse] = None
    profile_currencies: Optional[ComponentResponse] = None
    profile_progression: Optional[ComponentResponse] = None
    characters: Optional[ComponentResponse] = None
    character_inventories: Optional[ComponentResponse] = None
    character_equipment: Optional[ComponentResponse] = None
    item_components: Optional[ComponentResponse] = None


class DestinyCharacterResponse(BungieModel):
    character: Optional[ComponentResponse] = None
    inventory: Optional[ComponentResponse] = None
    equipment: Optional[ComponentResponse] = None
    progressions: Optional[ComponentResponse] = None
    activities: Optional[ComponentResponse] = None
    item_components: Optional[ComponentResponse] = None


class DestinyItemResponse(BungieModel):
    character_id: Optional[int] = None
    item: Optional[ComponentResponse] = None
    instance: Optional[ComponentResponse] = None
    stats: Optional[ComponentResponse] = None
    sockets: Optional[ComponentResponse] = None
