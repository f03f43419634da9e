"""
Endpoint wrappers for the Bungie.net Platform API.

Each wrapper composes its URL and hands it to one of the three dispatch
helpers of the client. Payloads without a dedicated model are returned as
plain JSON objects. Every wrapper accepts an optional OAuth ``access_token``;
endpoints that act on behalf of a user require it.
"""

from typing import Any, Dict, List, Optional, Sequence

from .api_models import (
    BungieMembershipType,
    CoreSettingsConfiguration,
    CoreSystem,
    DestinyActivityModeType,
    DestinyCharacterResponse,
    DestinyComponentType,
    DestinyItemActionRequest,
    DestinyItemResponse,
    DestinyItemSetActionRequest,
    DestinyItemStateRequest,
    DestinyItemTransferRequest,
    DestinyLinkedProfilesResponse,
    DestinyManifest,
    DestinyPostmasterTransferRequest,
    DestinyProfileResponse,
    ExactSearchRequest,
    GeneralUser,
    GlobalAlert,
    GroupNameSearchRequest,
    GroupsForMemberFilter,
    GroupType,
    RuntimeGroupMemberType,
    UserInfoCard,
    UserMembershipData,
    UserSearchPrefixRequest,
    UserSearchResponse,
)
from .url_builder import build_url

Json = Dict[str, Any]
Components = Optional[Sequence[DestinyComponentType]]


class BungieEndpoints:
    """Typed wrappers, mixed into BungieClient."""

    # --- Core ---

    async def get_available_locales(
        self, access_token: Optional[str] = None
    ) -> Dict[str, str]:
        """List of available localization cultures."""
        url = build_url("/GetAvailableLocales/")
        return await self._get(url, Dict[str, str], access_token)

    async def get_common_settings(
        self, access_token: Optional[str] = None
    ) -> CoreSettingsConfiguration:
        url = build_url("/Settings/")
        return await self._get(url, CoreSettingsConfiguration, access_token)

    async def get_global_alerts(
        self,
        includestreaming: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> List[GlobalAlert]:
        """Gets any active global alert for display in the forum banners."""
        url = build_url(
            "/GlobalAlerts/", [("includestreaming", includestreaming)]
        )
        return await self._get(url, List[GlobalAlert], access_token)

    async def get_user_system_overrides(
        self, access_token: Optional[str] = None
    ) -> Dict[str, CoreSystem]:
        url = build_url("/UserSystemOverrides/")
        return await self._get(url, Dict[str, CoreSystem], access_token)

    # --- App ---

    async def app_get_application_api_usage(
        self,
        application_id: int,
        end: Optional[Any] = None,
        start: Optional[Any] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        """API usage of an application; requires the owner's access token."""
        url = build_url(
            "/App/ApiUsage/{application_id}/",
            [("end", end), ("start", start)],
            application_id=application_id,
        )
        return await self._get(url, Json, access_token)

    async def app_get_bungie_applications(
        self, access_token: Optional[str] = None
    ) -> List[Json]:
        url = build_url("/App/FirstParty/")
        return await self._get(url, List[Json], access_token)

    # --- Content ---

    async def content_get_content_by_id(
        self,
        id: int,
        locale: str,
        head: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Content/GetContentById/{id}/{locale}/",
            [("head", head)],
            id=id,
            locale=locale,
        )
        return await self._get(url, Json, access_token)

    async def content_get_content_by_tag_and_type(
        self,
        locale: str,
        tag: str,
        type: str,
        head: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Content/GetContentByTagAndType/{tag}/{type}/{locale}/",
            [("head", head)],
            tag=tag,
            type=type,
            locale=locale,
        )
        return await self._get(url, Json, access_token)

    async def content_search_content_with_text(
        self,
        locale: str,
        ctype: Optional[str] = None,
        currentpage: Optional[int] = None,
        head: Optional[bool] = None,
        searchtext: Optional[str] = None,
        source: Optional[str] = None,
        tag: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Content/Search/{locale}/",
            [
                ("ctype", ctype),
                ("currentpage", currentpage),
                ("head", head),
                ("searchtext", searchtext),
                ("source", source),
                ("tag", tag),
            ],
            locale=locale,
        )
        return await self._get(url, Json, access_token)

    async def content_rss_news_articles(
        self,
        page_token: str,
        categoryfilter: Optional[str] = None,
        includebody: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Content/Rss/NewsArticles/{page_token}/",
            [("categoryfilter", categoryfilter), ("includebody", includebody)],
            page_token=page_token,
        )
        return await self._get(url, Json, access_token)

    # --- User ---

    async def user_get_bungie_net_user_by_id(
        self, id: int, access_token: Optional[str] = None
    ) -> GeneralUser:
        url = build_url("/User/GetBungieNetUserById/{id}/", id=id)
        return await self._get(url, GeneralUser, access_token)

    async def user_get_membership_data_by_id(
        self,
        membership_id: int,
        membership_type: BungieMembershipType,
        access_token: Optional[str] = None,
    ) -> UserMembershipData:
        url = build_url(
            "/User/GetMembershipsById/{membership_id}/{membership_type}/",
            membership_id=membership_id,
            membership_type=membership_type,
        )
        return await self._get(url, UserMembershipData, access_token)

    async def user_get_membership_data_for_current_user(
        self, access_token: Optional[str] = None
    ) -> UserMembershipData:
        """Memberships of the user the access token belongs to."""
        url = build_url("/User/GetMembershipsForCurrentUser/")
        return await self._get(url, UserMembershipData, access_token)

    async def user_get_sanitized_platform_display_names(
        self, membership_id: int, access_token: Optional[str] = None
    ) -> Dict[int, str]:
        url = build_url(
            "/User/GetSanitizedPlatformDisplayNames/{membership_id}/",
            membership_id=membership_id,
        )
        return await self._get(url, Dict[int, str], access_token)

    async def user_search_by_global_name_prefix(
        self,
        display_name_prefix: str,
        page: int,
        access_token: Optional[str] = None,
    ) -> UserSearchResponse:
        url = build_url(
            "/User/Search/Prefix/{display_name_prefix}/{page}/",
            display_name_prefix=display_name_prefix,
            page=page,
        )
        return await self._get(url, UserSearchResponse, access_token)

    async def user_search_by_global_name_post(
        self,
        page: int,
        request_body: UserSearchPrefixRequest,
        access_token: Optional[str] = None,
    ) -> UserSearchResponse:
        url = build_url("/User/Search/GlobalName/{page}/", page=page)
        return await self._post_with_body(
            url, request_body, UserSearchResponse, access_token
        )

    # --- Destiny2: manifest and search ---

    async def destiny2_get_destiny_manifest(
        self, access_token: Optional[str] = None
    ) -> DestinyManifest:
        """Current version of the manifest as a json object."""
        url = build_url("/Destiny2/Manifest/")
        return await self._get(url, DestinyManifest, access_token)

    async def destiny2_get_destiny_entity_definition(
        self,
        entity_type: str,
        hash_identifier: int,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Destiny2/Manifest/{entity_type}/{hash_identifier}/",
            entity_type=entity_type,
            hash_identifier=hash_identifier,
        )
        return await self._get(url, Json, access_token)

    async def destiny2_search_destiny_entities(
        self,
        search_term: str,
        type: str,
        page: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Destiny2/Armory/Search/{type}/{search_term}/",
            [("page", page)],
            type=type,
            search_term=search_term,
        )
        return await self._get(url, Json, access_token)

    async def destiny2_search_destiny_player_by_bungie_name(
        self,
        membership_type: BungieMembershipType,
        request_body: ExactSearchRequest,
        access_token: Optional[str] = None,
    ) -> List[UserInfoCard]:
        """Exact match on a Bungie Name such as ``Guardian#1234``."""
        url = build_url(
            "/Destiny2/SearchDestinyPlayerByBungieName/{membership_type}/",
            membership_type=membership_type,
        )
        return await self._post_with_body(
            url, request_body, List[UserInfoCard], access_token
        )

    async def destiny2_get_linked_profiles(
        self,
        membership_id: int,
        membership_type: BungieMembershipType,
        get_all_memberships: Optional[bool] = None,
        access_token: Optional[str] = None,
    ) -> DestinyLinkedProfilesResponse:
        url = build_url(
            "/Destiny2/{membership_type}/Profile/{membership_id}/LinkedProfiles/",
            [("getAllMemberships", get_all_memberships)],
            membership_type=membership_type,
            membership_id=membership_id,
        )
        return await self._get(url, DestinyLinkedProfilesResponse, access_token)

    # --- Destiny2: profile data ---

    async def destiny2_get_profile(
        self,
        destiny_membership_id: int,
        membership_type: BungieMembershipType,
        components: Components = None,
        access_token: Optional[str] = None,
    ) -> DestinyProfileResponse:
        """
        Returns Destiny Profile information for the supplied membership.

        Args:
            destiny_membership_id: Destiny membership ID.
            membership_type: A valid non-BungieNet membership type.
            components: Component groups to load, sent comma-joined in order.
            access_token: Needed for components the user keeps private.
        """
        url = build_url(
            "/Destiny2/{membership_type}/Profile/{destiny_membership_id}/",
            [("components", components)],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
        )
        return await self._get(url, DestinyProfileResponse, access_token)

    async def destiny2_get_character(
        self,
        character_id: int,
        destiny_membership_id: int,
        membership_type: BungieMembershipType,
        components: Components = None,
        access_token: Optional[str] = None,
    ) -> DestinyCharacterResponse:
        url = build_url(
            "/Destiny2/{membership_type}/Profile/{destiny_membership_id}"
            "/Character/{character_id}/",
            [("components", components)],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
            character_id=character_id,
        )
        return await self._get(url, DestinyCharacterResponse, access_token)

    async def destiny2_get_item(
        self,
        destiny_membership_id: int,
        item_instance_id: int,
        membership_type: BungieMembershipType,
        components: Components = None,
        access_token: Optional[str] = None,
    ) -> DestinyItemResponse:
        url = build_url(
            "/Destiny2/{membership_type}/Profile/{destiny_membership_id}"
            "/Item/{item_instance_id}/",
            [("components", components)],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
            item_instance_id=item_instance_id,
        )
        return await self._get(url, DestinyItemResponse, access_token)

    async def destiny2_get_vendors(
        self,
        character_id: int,
        destiny_membership_id: int,
        membership_type: BungieMembershipType,
        components: Components = None,
        filter: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Destiny2/{membership_type}/Profile/{destiny_membership_id}"
            "/Character/{character_id}/Vendors/",
            [("components", components), ("filter", filter)],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
            character_id=character_id,
        )
        return await self._get(url, Json, access_token)

    async def destiny2_get_vendor(
        self,
        character_id: int,
        destiny_membership_id: int,
        membership_type: BungieMembershipType,
        vendor_hash: int,
        components: Components = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Destiny2/{membership_type}/Profile/{destiny_membership_id}"
            "/Character/{character_id}/Vendors/{vendor_hash}/",
            [("components", components)],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
            character_id=character_id,
            vendor_hash=vendor_hash,
        )
        return await self._get(url, Json, access_token)

    async def destiny2_get_public_vendors(
        self, components: Components = None, access_token: Optional[str] = None
    ) -> Json:
        url = build_url("/Destiny2/Vendors/", [("components", components)])
        return await self._get(url, Json, access_token)

    async def destiny2_get_public_milestones(
        self, access_token: Optional[str] = None
    ) -> Dict[int, Json]:
        url = build_url("/Destiny2/Milestones/")
        return await self._get(url, Dict[int, Json], access_token)

    async def destiny2_get_clan_weekly_reward_state(
        self, group_id: int, access_token: Optional[str] = None
    ) -> Json:
        url = build_url(
            "/Destiny2/Clan/{group_id}/WeeklyRewardState/", group_id=group_id
        )
        return await self._get(url, Json, access_token)

    # --- Destiny2: stats ---

    async def destiny2_get_post_game_carnage_report(
        self, activity_id: int, access_token: Optional[str] = None
    ) -> Json:
        url = build_url(
            "/Destiny2/Stats/PostGameCarnageReport/{activity_id}/",
            activity_id=activity_id,
        )
        return await self._get(url, Json, access_token)

    async def destiny2_get_activity_history(
        self,
        character_id: int,
        destiny_membership_id: int,
        membership_type: BungieMembershipType,
        count: Optional[int] = None,
        mode: Optional[DestinyActivityModeType] = None,
        page: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Destiny2/{membership_type}/Account/{destiny_membership_id}"
            "/Character/{character_id}/Stats/Activities/",
            [("count", count), ("mode", mode), ("page", page)],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
            character_id=character_id,
        )
        return await self._get(url, Json, access_token)

    async def destiny2_get_historical_stats(
        self,
        character_id: int,
        destiny_membership_id: int,
        membership_type: BungieMembershipType,
        dayend: Optional[Any] = None,
        daystart: Optional[Any] = None,
        groups: Optional[Sequence[int]] = None,
        modes: Optional[Sequence[DestinyActivityModeType]] = None,
        period_type: Optional[int] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Json]:
        url = build_url(
            "/Destiny2/{membership_type}/Account/{destiny_membership_id}"
            "/Character/{character_id}/Stats/",
            [
                ("dayend", dayend),
                ("daystart", daystart),
                ("groups", groups),
                ("modes", modes),
                ("periodType", period_type),
            ],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
            character_id=character_id,
        )
        return await self._get(url, Dict[str, Json], access_token)

    async def destiny2_get_historical_stats_for_account(
        self,
        destiny_membership_id: int,
        membership_type: BungieMembershipType,
        groups: Optional[Sequence[int]] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Destiny2/{membership_type}/Account/{destiny_membership_id}/Stats/",
            [("groups", groups)],
            membership_type=membership_type,
            destiny_membership_id=destiny_membership_id,
        )
        return await self._get(url, Json, access_token)

    # --- Destiny2: item actions (require an access token) ---

    async def destiny2_equip_item(
        self,
        request_body: DestinyItemActionRequest,
        access_token: Optional[str] = None,
    ) -> int:
        url = build_url("/Destiny2/Actions/Items/EquipItem/")
        return await self._post_with_body(url, request_body, int, access_token)

    async def destiny2_equip_items(
        self,
        request_body: DestinyItemSetActionRequest,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url("/Destiny2/Actions/Items/EquipItems/")
        return await self._post_with_body(url, request_body, Json, access_token)

    async def destiny2_transfer_item(
        self,
        request_body: DestinyItemTransferRequest,
        access_token: Optional[str] = None,
    ) -> int:
        url = build_url("/Destiny2/Actions/Items/TransferItem/")
        return await self._post_with_body(url, request_body, int, access_token)

    async def destiny2_pull_from_postmaster(
        self,
        request_body: DestinyPostmasterTransferRequest,
        access_token: Optional[str] = None,
    ) -> int:
        url = build_url("/Destiny2/Actions/Items/PullFromPostmaster/")
        return await self._post_with_body(url, request_body, int, access_token)

    async def destiny2_set_item_lock_state(
        self,
        request_body: DestinyItemStateRequest,
        access_token: Optional[str] = None,
    ) -> int:
        url = build_url("/Destiny2/Actions/Items/SetLockState/")
        return await self._post_with_body(url, request_body, int, access_token)

    async def destiny2_set_quest_tracked_state(
        self,
        request_body: DestinyItemStateRequest,
        access_token: Optional[str] = None,
    ) -> int:
        url = build_url("/Destiny2/Actions/Items/SetTrackedState/")
        return await self._post_with_body(url, request_body, int, access_token)

    # --- GroupV2 ---

    async def group_v2_get_group(
        self, group_id: int, access_token: Optional[str] = None
    ) -> Json:
        url = build_url("/GroupV2/{group_id}/", group_id=group_id)
        return await self._get(url, Json, access_token)

    async def group_v2_get_group_by_name(
        self,
        group_name: str,
        group_type: GroupType,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/GroupV2/Name/{group_name}/{group_type}/",
            group_name=group_name,
            group_type=group_type,
        )
        return await self._get(url, Json, access_token)

    async def group_v2_get_group_by_name_v2(
        self,
        request_body: GroupNameSearchRequest,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url("/GroupV2/NameV2/")
        return await self._post_with_body(url, request_body, Json, access_token)

    async def group_v2_get_groups_for_member(
        self,
        filter: GroupsForMemberFilter,
        group_type: GroupType,
        membership_id: int,
        membership_type: BungieMembershipType,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/GroupV2/User/{membership_type}/{membership_id}/{filter}/{group_type}/",
            membership_type=membership_type,
            membership_id=membership_id,
            filter=filter,
            group_type=group_type,
        )
        return await self._get(url, Json, access_token)

    async def group_v2_get_members_of_group(
        self,
        currentpage: int,
        group_id: int,
        member_type: Optional[RuntimeGroupMemberType] = None,
        name_search: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/GroupV2/{group_id}/Members/",
            [
                ("currentpage", currentpage),
                ("memberType", member_type),
                ("nameSearch", name_search),
            ],
            group_id=group_id,
        )
        return await self._get(url, Json, access_token)

    async def group_v2_get_admins_and_founder_of_group(
        self, currentpage: int, group_id: int, access_token: Optional[str] = None
    ) -> Json:
        url = build_url(
            "/GroupV2/{group_id}/AdminsAndFounder/",
            [("currentpage", currentpage)],
            group_id=group_id,
        )
        return await self._get(url, Json, access_token)

    async def group_v2_get_available_avatars(
        self, access_token: Optional[str] = None
    ) -> Dict[int, str]:
        url = build_url("/GroupV2/GetAvailableAvatars/")
        return await self._get(url, Dict[int, str], access_token)

    async def group_v2_kick_member(
        self,
        group_id: int,
        membership_id: int,
        membership_type: BungieMembershipType,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/GroupV2/{group_id}/Members/{membership_type}/{membership_id}/Kick/",
            group_id=group_id,
            membership_type=membership_type,
            membership_id=membership_id,
        )
        return await self._post(url, Json, access_token)

    async def group_v2_unban_member(
        self,
        group_id: int,
        membership_id: int,
        membership_type: BungieMembershipType,
        access_token: Optional[str] = None,
    ) -> int:
        url = build_url(
            "/GroupV2/{group_id}/Members/{membership_type}/{membership_id}/Unban/",
            group_id=group_id,
            membership_type=membership_type,
            membership_id=membership_id,
        )
        return await self._post(url, int, access_token)

    # --- Social ---

    async def social_get_friend_list(
        self, access_token: Optional[str] = None
    ) -> Json:
        url = build_url("/Social/Friends/")
        return await self._get(url, Json, access_token)

    async def social_get_friend_request_list(
        self, access_token: Optional[str] = None
    ) -> Json:
        url = build_url("/Social/Friends/Requests/")
        return await self._get(url, Json, access_token)

    async def social_issue_friend_request(
        self, membership_id: str, access_token: Optional[str] = None
    ) -> bool:
        url = build_url(
            "/Social/Friends/Add/{membership_id}/", membership_id=membership_id
        )
        return await self._post(url, bool, access_token)

    async def social_accept_friend_request(
        self, membership_id: str, access_token: Optional[str] = None
    ) -> bool:
        url = build_url(
            "/Social/Friends/Requests/Accept/{membership_id}/",
            membership_id=membership_id,
        )
        return await self._post(url, bool, access_token)

    async def social_remove_friend(
        self, membership_id: str, access_token: Optional[str] = None
    ) -> bool:
        url = build_url(
            "/Social/Friends/Remove/{membership_id}/", membership_id=membership_id
        )
        return await self._post(url, bool, access_token)

    # --- Tokens ---

    async def tokens_get_bungie_rewards_list(
        self, access_token: Optional[str] = None
    ) -> Dict[str, Json]:
        url = build_url("/Tokens/Rewards/BungieRewards/")
        return await self._get(url, Dict[str, Json], access_token)

    async def tokens_get_bungie_rewards_for_user(
        self, membership_id: int, access_token: Optional[str] = None
    ) -> Dict[str, Json]:
        url = build_url(
            "/Tokens/Rewards/GetRewardsForUser/{membership_id}/",
            membership_id=membership_id,
        )
        return await self._get(url, Dict[str, Json], access_token)

    # --- Trending ---

    async def trending_get_trending_categories(
        self, access_token: Optional[str] = None
    ) -> Json:
        url = build_url("/Trending/Categories/")
        return await self._get(url, Json, access_token)

    async def trending_get_trending_category(
        self,
        category_id: str,
        page_number: int,
        access_token: Optional[str] = None,
    ) -> Json:
        url = build_url(
            "/Trending/Categories/{category_id}/{page_number}/",
            category_id=category_id,
            page_number=page_number,
        )
        return await self._get(url, Json, access_token)
