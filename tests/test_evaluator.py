import json
import math

from passadvisor.evaluator import (
    DICTIONARY_ATTACK_ESTIMATE,
    SUGGEST_COMMON,
    SUGGEST_DIGITS,
    SUGGEST_LENGTH,
    SUGGEST_LOWER,
    SUGGEST_PERSONAL,
    SUGGEST_REPEATS,
    SUGGEST_SEQUENCES,
    SUGGEST_SPECIAL,
    SUGGEST_UPPER,
    VERY_STRONG_MESSAGE,
    ContextInfo,
    StrengthLevel,
    analyze,
    estimate_crack_time,
    estimate_entropy,
    has_common_pattern,
    has_repeated_characters,
    has_sequential_pattern,
    humanize_seconds,
    level_for_score,
)

def test_empty_password_is_not_analyzed():
    assert analyze("") is None
    assert analyze("", {"name": "alice"}) is None

def test_known_weak_password_forces_very_weak():
    for pw in ("password", "Password", "LETMEIN", "qwerty123"):
        result = analyze(pw)
        assert result.breach_detected
        assert result.score == 0
        assert result.level is StrengthLevel.VERY_WEAK
        assert result.crack_time == "instant"
    # the breach path still warns about common words
    joined = " ".join(analyze("password").suggestions).lower()
    assert "common" in joined

def test_level_thresholds():
    expected = {
        0: StrengthLevel.VERY_WEAK,
        19: StrengthLevel.VERY_WEAK,
        20: StrengthLevel.WEAK,
        39: StrengthLevel.WEAK,
        40: StrengthLevel.MEDIUM,
        59: StrengthLevel.MEDIUM,
        60: StrengthLevel.STRONG,
        79: StrengthLevel.STRONG,
        80: StrengthLevel.VERY_STRONG,
        100: StrengthLevel.VERY_STRONG,
    }
    for score, level in expected.items():
        assert level_for_score(score) is level
    # out of range values are clamped
    assert level_for_score(-5) is StrengthLevel.VERY_WEAK
    assert level_for_score(150) is StrengthLevel.VERY_STRONG

def test_level_is_monotonic():
    levels = [level_for_score(s) for s in range(0, 101)]
    assert levels == sorted(levels)

def test_level_labels_and_meter():
    assert StrengthLevel.VERY_WEAK.label == "Very Weak"
    assert StrengthLevel.MEDIUM.label == "Medium"
    assert StrengthLevel.VERY_STRONG.label == "Very Strong"
    assert [round(l.meter_fraction, 2) for l in StrengthLevel] == [0.2, 0.4, 0.6, 0.8, 1.0]

def test_score_always_in_range():
    samples = [
        "a", "aaaaaaa", "!!!!", "zq", "ZQ", "12345", "пароль", " ",
        "a" * 500, "Tr0ub4dor&3Xy!", "Password1234", "qwertyQWERTY111!!!",
        "mybirthyear1990x", "x" * 3 + "Y1!",
    ]
    for pw in samples:
        result = analyze(pw, {"name": "alice", "birth_year": "1990"})
        assert 0 <= result.score <= 100
        assert result.level is level_for_score(result.score)

def test_strong_password_is_very_strong():
    result = analyze("Tr0ub4dor&3Xy!")
    assert result.score == 100
    assert result.level is StrengthLevel.VERY_STRONG
    assert result.suggestions == (VERY_STRONG_MESSAGE,)
    assert result.crack_time == "centuries"
    assert not result.breach_detected
    assert not result.personal_info_detected

def test_missing_classes_suggestions_in_order():
    result = analyze("zq")
    assert result.suggestions == (SUGGEST_LENGTH, SUGGEST_UPPER, SUGGEST_DIGITS, SUGGEST_SPECIAL)
    assert result.score == 10
    assert result.crack_time == "< 1 second"

    result = analyze("ZQ")
    assert SUGGEST_LOWER in result.suggestions

def test_personal_info_penalty():
    pw = "mybirthyear1990x"
    without = analyze(pw)
    with_ctx = analyze(pw, {"birth_year": "1990"})
    assert not without.personal_info_detected
    assert with_ctx.personal_info_detected
    assert without.score == 50
    assert with_ctx.score == without.score - 30
    assert SUGGEST_PERSONAL in with_ctx.suggestions
    # long but now low scoring: presumed dictionary crackable
    assert without.crack_time == "centuries"
    assert with_ctx.crack_time == DICTIONARY_ATTACK_ESTIMATE

def test_personal_info_applied_once_and_case_insensitive():
    ctx = ContextInfo(name="John", birth_year="1990", fav_word="SMITH")
    result = analyze("JohnSmith1990!", ctx)
    assert result.personal_info_detected
    assert result.score == 70
    assert result.suggestions.count(SUGGEST_PERSONAL) == 1

def test_short_context_fields_ignored():
    result = analyze("mybirthyear1990x", {"name": "my", "mobile": "19"})
    assert not result.personal_info_detected
    # length is measured on the raw value
    assert ContextInfo(name="ab", mobile=" 19 ").values() == [" 19 "]
    assert analyze("pin 19 here", {"mobile": " 19 "}).personal_info_detected

def test_camel_case_context_keys():
    result = analyze("mybirthyear1990x", {"birthYear": "1990"})
    assert result.personal_info_detected
    assert result.score == 20
    assert ContextInfo.from_mapping({"favWord": "kiwi"}) == ContextInfo(fav_word="kiwi")

def test_unknown_context_keys_ignored():
    ctx = ContextInfo.from_mapping({"pet": "rex", "name": "alice"})
    assert ctx == ContextInfo(name="alice")

def test_common_pattern_substring():
    result = analyze("MyDragon#2024X")
    assert SUGGEST_COMMON in result.suggestions
    assert not result.breach_detected
    assert result.score == 80

def test_repeat_penalty():
    result = analyze("Xaaa1!bcQ")
    assert result.score == 90 - 10
    assert SUGGEST_REPEATS in result.suggestions

def test_sequence_penalty():
    for pw in ("Zq!712345Wv", "Zq!754321Wv"):
        result = analyze(pw)
        assert result.score == 90 - 15
        assert SUGGEST_SEQUENCES in result.suggestions

def test_stacked_penalties_clamp_at_zero():
    # 50 before deductions: repeat, sequence, common word and personal info
    result = analyze("passwordaaa12345", {"name": "password"})
    assert result.score == 0
    assert result.level is StrengthLevel.VERY_WEAK
    for s in (SUGGEST_REPEATS, SUGGEST_SEQUENCES, SUGGEST_COMMON, SUGGEST_PERSONAL):
        assert s in result.suggestions

def test_detectors():
    assert has_repeated_characters("xaaay")
    assert not has_repeated_characters("xaay")
    assert has_sequential_pattern("my12345")
    assert has_sequential_pattern("54321x")  # reversed run
    assert has_sequential_pattern("QWERTYpass")
    assert not has_sequential_pattern("Tr0ub4dor&3Xy!")
    assert has_common_pattern("iLoveMyMonkey")
    assert not has_common_pattern("Tr0ub4dor&3Xy!")

def test_idempotent():
    ctx = {"name": "alice"}
    assert analyze("Alice#2024long", ctx) == analyze("Alice#2024long", ctx)

def test_entropy_and_crack_time():
    assert estimate_entropy("") == 0.0
    assert estimate_crack_time("", 0) == ("instant", 0.0)
    assert math.isclose(estimate_entropy("abcd"), 4 * math.log2(26))
    assert math.isclose(estimate_entropy("aA1!"), 4 * math.log2(94))
    # huge passwords must not overflow
    result = analyze("a" * 500)
    assert result.crack_seconds == math.inf
    assert result.crack_time == DICTIONARY_ATTACK_ESTIMATE

def test_humanize_buckets():
    day = 86400
    assert humanize_seconds(0.5) == "< 1 second"
    assert humanize_seconds(1) == "1 second"
    assert humanize_seconds(30) == "30 seconds"
    assert humanize_seconds(120) == "2 minutes"
    assert humanize_seconds(7200) == "2 hours"
    assert humanize_seconds(3 * day) == "3 days"
    assert humanize_seconds(60 * day) == "2 months"
    assert humanize_seconds(5 * 365 * day) == "5 years"
    assert humanize_seconds(200 * 365 * day) == "centuries"
    assert humanize_seconds(math.inf) == "centuries"

def test_result_to_dict_is_json_friendly():
    data = analyze("Tr0ub4dor&3Xy!").to_dict()
    assert data["level"] == "Very Strong"
    assert data["meter_fraction"] == 1.0
    json.dumps(data)
