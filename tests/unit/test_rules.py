"""
Unit tests for rule evaluation precedence.
"""
import pytest

from toggles.core.hashing import bucket_for
from toggles.models.schemas import EvaluationContext, Flag
from toggles.services.rules import evaluate_flag_for_user


def user_in_bucket(bucket: int) -> str:
    """Find a user id that hashes to the given bucket."""
    return next(
        f"user-{i}" for i in range(100_000) if bucket_for(f"user-{i}") == bucket
    )


class TestEveryoneOverride:
    @pytest.mark.parametrize("everyone", [True, False])
    def test_override_ignores_other_rules(self, everyone):
        flag = Flag(
            name="f",
            everyone=everyone,
            users=["u1"],
            roles=["admin"],
            groups=["beta"],
            percent=99.9,
        )
        contexts = [
            EvaluationContext(),
            EvaluationContext(user="u1"),
            EvaluationContext(user="u2", roles=["admin"], groups=["beta"]),
        ]
        for ctx in contexts:
            assert evaluate_flag_for_user(flag, ctx) is everyone

    def test_everyone_true_for_user(self):
        flag = Flag(name="f", everyone=True)
        assert evaluate_flag_for_user(flag, EvaluationContext(user="u1")) is True

    def test_unset_defers_to_rules(self):
        flag = Flag(name="f", users=["u1"])
        assert flag.everyone is None
        assert evaluate_flag_for_user(flag, EvaluationContext(user="u1")) is True
        assert evaluate_flag_for_user(flag, EvaluationContext(user="u2")) is False


class TestTargeting:
    def test_user_allow_list(self):
        flag = Flag(name="f", users=["alice", "bob"])
        assert evaluate_flag_for_user(flag, EvaluationContext(user="bob")) is True
        assert evaluate_flag_for_user(flag, EvaluationContext(user="carol")) is False
        assert evaluate_flag_for_user(flag, EvaluationContext()) is False

    def test_roles(self):
        flag = Flag(name="f", roles=["admin"])
        assert evaluate_flag_for_user(
            flag, EvaluationContext(user="u2", roles=["user"])
        ) is False
        assert evaluate_flag_for_user(
            flag, EvaluationContext(roles=["admin"])
        ) is True

    def test_groups(self):
        flag = Flag(name="f", groups=["beta"])
        assert evaluate_flag_for_user(flag, EvaluationContext(groups=[])) is False
        assert evaluate_flag_for_user(flag, EvaluationContext(groups=["beta"])) is True

    def test_matching_is_case_sensitive(self):
        flag = Flag(name="f", roles=["Admin"], groups=["Beta"])
        ctx = EvaluationContext(roles=["admin"], groups=["beta"])
        assert evaluate_flag_for_user(flag, ctx) is False

    def test_empty_flag_lists_never_match(self):
        flag = Flag(name="f", roles=[], groups=[], users=[])
        ctx = EvaluationContext(user="u1", roles=["admin"], groups=["beta"])
        assert evaluate_flag_for_user(flag, ctx) is False

    def test_no_rules_defaults_off(self):
        flag = Flag(name="f")
        ctx = EvaluationContext(user="u1", roles=["admin"], groups=["beta"])
        assert evaluate_flag_for_user(flag, ctx) is False


class TestPercentageRollout:
    def test_percent_spreads_users(self):
        flag = Flag(name="f", percent=50)
        results = {
            evaluate_flag_for_user(flag, EvaluationContext(user=f"user-{i}"))
            for i in range(20)
        }
        assert results == {True, False}

    def test_repeatable_for_same_user(self):
        flag = Flag(name="f", percent=33.3)
        ctx = EvaluationContext(user="user_42")
        first = evaluate_flag_for_user(flag, ctx)
        assert all(evaluate_flag_for_user(flag, ctx) == first for _ in range(20))

    def test_bucket_compared_against_real_percent(self):
        user = user_in_bucket(25)
        ctx = EvaluationContext(user=user)
        assert evaluate_flag_for_user(Flag(name="f", percent=25), ctx) is False
        assert evaluate_flag_for_user(Flag(name="f", percent=25.5), ctx) is True

    def test_zero_percent_never_matches(self):
        flag = Flag(name="f", percent=0)
        user = user_in_bucket(0)
        assert evaluate_flag_for_user(flag, EvaluationContext(user=user)) is False

    def test_max_percent_includes_top_bucket(self):
        flag = Flag(name="f", percent=99.9)
        user = user_in_bucket(99)
        assert evaluate_flag_for_user(flag, EvaluationContext(user=user)) is True

    def test_requires_user(self):
        flag = Flag(name="f", percent=99.9)
        assert evaluate_flag_for_user(flag, EvaluationContext(roles=["admin"])) is False

    def test_targeting_wins_over_rollout(self):
        user = user_in_bucket(90)
        flag = Flag(name="f", percent=10, users=[user])
        assert evaluate_flag_for_user(flag, EvaluationContext(user=user)) is True


class TestFlagModel:
    def test_percent_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            Flag(name="f", percent=100)
        with pytest.raises(ValueError):
            Flag(name="f", percent=-1)

    def test_empty_lists_read_as_absent(self):
        flag = Flag(name="f", roles=[], groups=[], users=[])
        assert flag.roles is None
        assert flag.groups is None
        assert flag.users is None

    def test_list_order_preserved(self):
        flag = Flag(name="f", roles=["b", "a", "c"])
        assert flag.roles == ["b", "a", "c"]
