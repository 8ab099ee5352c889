"""
Deterministic user hashing for percentage rollouts.
MurmurHash3 (x86, 32-bit, seed 0) over UTF-8 bytes, so bucket assignment
matches any other MurmurHash3 implementation byte for byte.
"""
import mmh3

HASH_SEED = 0
BUCKET_COUNT = 100


def murmur_hash(value: str) -> int:
    """
    Return the unsigned 32-bit MurmurHash3 of a string.

    Lone surrogates (valid in JSON input) are encoded as-is rather than rejected.
    """
    return mmh3.hash(value.encode("utf-8", "surrogatepass"), HASH_SEED, signed=False)


def bucket_for(user_id: str) -> int:
    """
    Map a user identifier to its rollout bucket.

    Returns:
        Integer in [0, 99]; the same user always lands in the same bucket.
    """
    return murmur_hash(user_id) % BUCKET_COUNT
