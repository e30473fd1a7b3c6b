"""Tests for tracking parameter categorization."""

import pytest
from cleanurl.cleaning.analyzer import analyze_url, badge_text, classify_param, tracking_param_count
from cleanurl.cleaning.patterns import TRACKING_PARAM_PATTERNS, TrackingCategory, is_tracking_param


CATEGORY_NAMES = {"utm", "social", "ads", "affiliate", "email", "analytics"}


def test_one_of_each_category():
    result = analyze_url("https://example.com?utm_source=google&fbclid=123&mc_cid=456&gclid=789")

    assert result.success is True
    assert result.summary == {
        "utm": 1, "social": 1, "ads": 1, "affiliate": 0, "email": 1, "analytics": 0,
    }
    assert result.categories["social"][0].key == "fbclid"


def test_categorizes_social():
    result = analyze_url("https://example.com?utm_source=test&utm_medium=email&fbclid=123&igshid=456")

    assert result.summary["utm"] == 2
    assert result.summary["social"] == 2
    assert [p.key for p in result.categories["utm"]] == ["utm_source", "utm_medium"]


def test_google_ads_params():
    result = analyze_url("https://example.com?gclid=abc&matchtype=e&campaign_id=123&ad_id=456")
    assert result.summary["ads"] == 4


def test_amazon_params_are_affiliate():
    result = analyze_url("https://amazon.com/dp/B123?tag=test-20&linkCode=abc&camp=123")
    assert result.summary["affiliate"] == 3


def test_hubspot_params_are_email():
    result = analyze_url("https://example.com?_hsenc=test123&_hsmi=456")
    assert result.summary["email"] == 2


def test_leftovers_are_analytics():
    result = analyze_url("https://example.com?sthash=test&source=analytics&_bhlid=1")
    assert result.summary["analytics"] == 3


@pytest.mark.parametrize("key,category", [
    ("utm_ad", TrackingCategory.UTM),
    ("UTM_Source", TrackingCategory.UTM),
    ("utm_nooverride", TrackingCategory.UTM),
    ("TRK", TrackingCategory.SOCIAL),
    ("gbraid", TrackingCategory.ADS),
    ("linkCode", TrackingCategory.AFFILIATE),
    ("pd_rd_wg", TrackingCategory.AFFILIATE),
    ("ck_subscriber_id", TrackingCategory.EMAIL),
    ("adgroup", TrackingCategory.ANALYTICS),
    ("campaign", TrackingCategory.ANALYTICS),
])
def test_classify_param_precedence(key, category):
    assert classify_param(key) == category


def test_categories_partition_removed_params():
    url = "https://example.com?" + "&".join(f"{name}=v{i}" for i, name in enumerate(TRACKING_PARAM_PATTERNS))
    result = analyze_url(url)

    assert result.removed_count == len(TRACKING_PARAM_PATTERNS)
    assert sum(result.summary.values()) == result.removed_count

    categorized = [p for params in result.categories.values() for p in params]
    assert sorted(p.value for p in categorized) == sorted(p.value for p in result.removed_params)
    for name, params in result.categories.items():
        assert result.summary[name] == len(params)


def test_failure_has_empty_categories():
    result = analyze_url("not-a-url")

    assert result.success is False
    assert result.error == "Invalid URL: Not a properly formatted URL"
    assert set(result.categories) == CATEGORY_NAMES
    assert all(params == [] for params in result.categories.values())
    assert result.summary == {name: 0 for name in CATEGORY_NAMES}


def test_analysis_to_dict_shape():
    data = analyze_url("https://example.com?ref=x&page=1").to_dict()

    assert data["cleanedUrl"] == "https://example.com/?page=1"
    assert data["categories"]["affiliate"] == [{"key": "ref", "value": "x"}]
    assert data["summary"]["affiliate"] == 1


def test_analysis_matches_clean_result():
    result = analyze_url("https://example.com/docs?utm_source=email&section=api#installation")

    assert result.cleaned_url == "https://example.com/docs?section=api#installation"
    assert result.has_changes is True


def test_tracking_param_count():
    assert tracking_param_count("https://example.com?utm_source=a&ref=b&id=1") == 2
    assert tracking_param_count("https://example.com") == 0
    assert tracking_param_count("not-a-url") == 0
    assert tracking_param_count(None) == 0


@pytest.mark.parametrize("count,label", [(0, ""), (1, "1"), (99, "99"), (100, "99+"), (250, "99+")])
def test_badge_text(count, label):
    assert badge_text(count) == label


def test_pattern_table():
    assert isinstance(TRACKING_PARAM_PATTERNS, tuple)
    assert len({name.lower() for name in TRACKING_PARAM_PATTERNS}) == len(TRACKING_PARAM_PATTERNS)
    assert is_tracking_param("LINKCODE")
    assert not is_tracking_param("utm")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
