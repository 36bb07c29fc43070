from orchestrator.preference_extractor import (
    HeuristicPreferenceExtractor,
    detect_missing_preference,
    infer_preferences_from_message,
)


def _by_key(inferred):
    return {p.key: p for p in inferred}


def test_missing_preference_detected_from_keywords():
    assert detect_missing_preference("Can I buy an HDB resale flat?", None) == "housing_status"


def test_known_preference_is_not_asked_again():
    existing = "USER PREFERENCES:\n- housing_status: \"renting\" (User stated)"
    assert detect_missing_preference("Looking at HDB flats", existing) is None


def test_first_category_in_table_order_wins():
    # "rent" (housing) and "budget" both occur; housing is declared first
    assert detect_missing_preference("what budget do I need to rent", "") == "housing_status"
    assert detect_missing_preference("what budget do I need to rent", "housing_status") == "budget_preference"


def test_substring_matching_is_plain():
    # "pr" inside "price" counts, but budget_preference comes first
    assert detect_missing_preference("price", None) == "budget_preference"


def test_no_keywords_means_no_missing_preference():
    assert detect_missing_preference("hello there", None) is None


def test_pr_living_in_hdb_with_wife():
    inferred = infer_preferences_from_message("I am a PR living in a 4-room HDB with my wife")
    prefs = _by_key(inferred)

    assert prefs["citizenship_status"].value == "pr"
    assert prefs["citizenship_status"].label == "Permanent Resident"
    assert prefs["housing_status"].value == "4-room-hdb"
    assert prefs["housing_status"].label == "4 ROOM HDB"
    assert prefs["family_status"].value == "married"
    assert len(inferred) == len(prefs)


def test_owner_housing_pattern():
    prefs = _by_key(infer_preferences_from_message("We own a 5 room flat in the east"))
    assert prefs["housing_status"].value == "5-room-hdb-owner"
    assert prefs["housing_status"].label == "5 ROOM HDB (Owner)"


def test_each_category_contributes_once():
    inferred = infer_preferences_from_message("I'm married and my husband and my kids love it")
    assert [p.key for p in inferred].count("family_status") == 1
    assert _by_key(inferred)["family_status"].value == "married"


def test_employment_and_budget():
    prefs = _by_key(infer_preferences_from_message("I'm self-employed and looking for cheap insurance"))
    assert prefs["employment_type"].value == "self-employed"
    assert prefs["budget_preference"].value == "budget-conscious"


def test_flexible_budget():
    prefs = _by_key(infer_preferences_from_message("Money is not a problem for this"))
    assert prefs["budget_preference"].value == "flexible"


def test_likes_are_slugged():
    prefs = _by_key(infer_preferences_from_message("I love spicy laksa, any tips?"))
    assert prefs["likes_spicy_laksa"].value == "spicy laksa"
    assert prefs["likes_spicy_laksa"].label == "Likes spicy laksa"


def test_likes_stop_words_are_ignored():
    inferred = infer_preferences_from_message("I want it")
    assert not [p for p in inferred if p.key.startswith("likes_")]


def test_sounds_good_only_when_like_shape_absent():
    prefs = _by_key(infer_preferences_from_message("Chicken rice sounds good"))
    assert prefs["likes_chicken_rice"].value == "chicken rice"


def test_area_inference_distinguishes_work_and_home():
    home = _by_key(infer_preferences_from_message("I stay in Tampines"))
    work = _by_key(infer_preferences_from_message("I work at orchard"))

    assert home["home_area"].value == "tampines"
    assert home["home_area"].label == "Tampines"
    assert work["work_area"].value == "orchard"
    assert "employment_type" in work


def test_nothing_inferred_from_plain_question():
    assert infer_preferences_from_message("How do I renew my passport?") == []


def test_heuristic_extractor_delegates():
    extractor = HeuristicPreferenceExtractor()
    assert extractor.detect_missing("hdb", None) == "housing_status"
    assert [p.key for p in extractor.infer("I'm a student")] == ["employment_type"]


def test_likes_slug_is_capped():
    item = "very spicy mee goreng from the old hawker stall"
    inferred = infer_preferences_from_message(f"I love {item}")
    likes = [p for p in inferred if p.key.startswith("likes_")]

    assert len(likes) == 1
    assert len(likes[0].key) == len("likes_") + 30
    assert likes[0].key == "likes_" + item.replace(" ", "_")[:30]
    assert likes[0].value == item
