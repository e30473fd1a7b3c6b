"""Known tracking parameter names and the categories they are reported under."""

from enum import Enum


TRACKING_PARAM_PATTERNS = (
    # UTM parameters
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "utm_nooverride",

    # Social media trackers
    "fbclid",      # Facebook Click ID
    "igshid",      # Instagram Share ID
    "ttclid",      # TikTok Click ID
    "tiktok_r",    # TikTok Referral
    "li_fat_id",   # LinkedIn
    "mkt_tok",     # LinkedIn/Marketo token
    "trk",

    # Ad platform trackers
    "gclid",       # Google Click ID
    "yclid",       # Yandex Click ID
    "dclid",       # DoubleClick Click ID
    "msclkid",     # Microsoft Click ID
    "gad_source",
    "gad_campaignid",
    "gbraid",
    "utm_ad",
    "matchtype",   # exact/broad/phrase
    "campaign_id",
    "ad_id",

    # Affiliate & referral trackers
    "ref",
    "referral",
    "referrer",
    "affiliate_id",
    "afid",
    "click_id",
    "clickid",
    "subid",
    "sub_id",
    "partner_id",
    "sr_share",    # ShareThis

    # Amazon affiliate
    "tag",
    "linkCode",
    "linkId",
    "ascsubtag",
    "camp",
    "creative",
    "pd_rd_i",
    "pd_rd_r",
    "pd_rd_w",
    "pd_rd_wg",

    # Email & newsletter trackers
    "ck_subscriber_id",  # ConvertKit
    "mc_cid",            # MailChimp
    "mc_eid",
    "_hsenc",            # HubSpot
    "_hsmi",

    # Analytics & other
    "sthash",
    "source",
    "campaign",
    "adgroup",
    "adposition",
    "_bhlid",
)

_TRACKING_KEYS = frozenset(name.lower() for name in TRACKING_PARAM_PATTERNS)


def is_tracking_param(key: str) -> bool:
    """Exact, case-insensitive match against the tracking table."""
    return key.lower() in _TRACKING_KEYS


class TrackingCategory(str, Enum):
    """Category a removed tracking parameter is reported under."""
    UTM = "utm"
    SOCIAL = "social"
    ADS = "ads"
    AFFILIATE = "affiliate"
    EMAIL = "email"
    ANALYTICS = "analytics"


# Checked in order after the utm_ prefix rule; first hit wins.
CATEGORY_KEYS = (
    (TrackingCategory.SOCIAL, frozenset({
        "fbclid", "igshid", "ttclid", "tiktok_r", "li_fat_id", "mkt_tok", "trk",
    })),
    (TrackingCategory.ADS, frozenset({
        "gclid", "yclid", "dclid", "msclkid", "gad_source", "gad_campaignid",
        "gbraid", "utm_ad", "matchtype", "campaign_id", "ad_id",
    })),
    (TrackingCategory.AFFILIATE, frozenset({
        "ref", "referral", "referrer", "affiliate_id", "afid", "click_id",
        "clickid", "subid", "sub_id", "partner_id", "sr_share", "tag",
        "linkcode", "linkid", "ascsubtag", "camp", "creative",
        "pd_rd_i", "pd_rd_r", "pd_rd_w", "pd_rd_wg",
    })),
    (TrackingCategory.EMAIL, frozenset({
        "ck_subscriber_id", "mc_cid", "mc_eid", "_hsenc", "_hsmi",
    })),
)
