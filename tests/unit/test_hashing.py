"""
Unit tests for MurmurHash3 user bucketing.
"""
from toggles.core.hashing import bucket_for, murmur_hash
from toggles.services.feature_flags import FeatureFlagService


class TestMurmurHash:
    def test_known_values(self):
        # Reference MurmurHash3 x86_32, seed 0
        assert murmur_hash("") == 0
        assert murmur_hash("foo") == 4138058784

    def test_known_non_ascii_value(self):
        # UTF-8 bytes, not code points
        assert murmur_hash("ünïcødé") == 2210329462

    def test_lone_surrogate(self):
        assert murmur_hash("\ud800") == 3055733070
        assert 0 <= bucket_for("\ud800") <= 99

    def test_deterministic(self):
        for value in ["user_123", "", "ünïcødé", "a" * 1000]:
            assert murmur_hash(value) == murmur_hash(value)

    def test_unsigned_32_bit(self):
        for i in range(200):
            assert 0 <= murmur_hash(f"user-{i}") < 2 ** 32

    def test_discriminates_short_identifiers(self):
        values = [f"user-{i}" for i in range(500)]
        hashes = {murmur_hash(v) for v in values}
        assert len(hashes) == len(values)


class TestBuckets:
    def test_bucket_range(self):
        for i in range(1000):
            assert 0 <= bucket_for(f"user-{i}") <= 99

    def test_bucket_is_hash_mod_100(self):
        assert bucket_for("foo") == 4138058784 % 100

    def test_buckets_spread(self):
        buckets = {bucket_for(f"user-{i}") for i in range(1000)}
        # 1000 users should cover most of the 100 buckets
        assert len(buckets) > 90

    def test_hash_user_id_debug_record(self):
        record = FeatureFlagService.hash_user_id("foo")
        assert record.user_id == "foo"
        assert record.hash == 4138058784
        assert record.bucket == 84
