"""
Password generation: turn a character set, parameters and a random
source into passwords.

Two modes:
- patterned: position i is drawn uniformly from the members of pattern[i].
- free-form: every position is drawn uniformly from the whole set; a
  candidate that misses a minimum count is thrown away and redrawn.

Rejection keeps free-form output exactly uniform over all compliant
passwords, but tight minimums can make compliant candidates rare. The
redraws are bounded by both `rejection_attempts` and a budget of
REJECTION_CHAR_BUDGET drawn characters per password, and skipped entirely
when a minimum sits more than UNLIKELY_SIGMAS standard deviations above
its expected count. Past that point the last candidate is repaired
instead (see `_repair`), which always succeeds once the parameters passed
validation and runs in time linear in the length.
"""

from __future__ import annotations

import logging
import math

from .charset import CharacterClass, CharSet
from .params import (
    FreeForm,
    GenerationParams,
    Minimums,
    Patterned,
    count_classes,
    minimums_met,
    validate,
)
from .random_source import RandomSource

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_ATTEMPTS = 1000

# Characters drawn by rejection before repairing, per password.
REJECTION_CHAR_BUDGET = 200_000

# A minimum this many standard deviations above its binomial mean is
# treated as unreachable by rejection.
UNLIKELY_SIGMAS = 6.0


def _draw(charset: CharSet, length: int, source: RandomSource) -> list[str]:
    chars = charset.chars
    return [source.choice(chars) for _ in range(length)]


def _from_pattern(charset: CharSet, mode: Patterned, source: RandomSource) -> str:
    return "".join(source.choice(charset.members(cls)) for cls in mode.pattern)


def _minimums_unlikely(charset: CharSet, mode: FreeForm) -> bool:
    """
    True when a uniform draw almost never meets some minimum.

    The class count of a uniform draw is Binomial(length, p) with
    p = |class| / |charset|.
    """
    for char_class, minimum in mode.minimums.items():
        if not minimum:
            continue
        p = len(charset.members(char_class)) / len(charset)
        mean = mode.length * p
        sd = math.sqrt(mode.length * p * (1 - p))
        if minimum > mean + UNLIKELY_SIGMAS * sd:
            return True
    return False


def rejection_budget(charset: CharSet, mode: FreeForm, rejection_attempts: int) -> int:
    """Number of whole candidates to draw before falling back to repair."""
    if _minimums_unlikely(charset, mode):
        return 1
    by_chars = max(1, REJECTION_CHAR_BUDGET // mode.length)
    return min(rejection_attempts, by_chars)


def _repair(
    password: list[str],
    charset: CharSet,
    minimums: Minimums,
    source: RandomSource,
) -> list[str]:
    """
    Overwrite spare positions until every minimum is met.

    A position is spare when its character does not count towards a
    minimum: it has no required class, or its class already holds more
    than its minimum. Both the position and the replacement character are
    chosen uniformly; positions that stopped being spare since the list
    was built are discarded when picked.

    Accepted bias: a repaired password tends to hold the lacking class at
    exactly its minimum, so those counts are over-represented compared to
    pure rejection. Only reached after the rejection budget runs out.
    """
    required = dict(minimums.items())
    counts = count_classes(password)

    for char_class, minimum in minimums.items():
        if counts[char_class] >= minimum:
            continue
        spare = [
            i
            for i, ch in enumerate(password)
            if _is_spare(CharSet.class_of(ch), counts, required)
        ]
        while counts[char_class] < minimum:
            # Swap-remove a uniformly chosen entry.
            k = source.randbelow(len(spare))
            spare[k], spare[-1] = spare[-1], spare[k]
            pos = spare.pop()
            old_class = CharSet.class_of(password[pos])
            if not _is_spare(old_class, counts, required):
                continue
            if old_class is not None:
                counts[old_class] -= 1
            password[pos] = source.choice(charset.members(char_class))
            counts[char_class] += 1

    return password


def _is_spare(
    char_class: CharacterClass | None,
    counts: dict[CharacterClass, int],
    required: dict[CharacterClass, int],
) -> bool:
    if char_class is None:
        return True
    return counts[char_class] > required.get(char_class, 0)


def _free_form(
    charset: CharSet,
    mode: FreeForm,
    source: RandomSource,
    rejection_attempts: int,
) -> str:
    candidate = _draw(charset, mode.length, source)
    if not mode.minimums:
        return "".join(candidate)

    budget = rejection_budget(charset, mode, rejection_attempts)
    attempts = 1
    while not minimums_met(candidate, mode.minimums):
        if attempts >= budget:
            logger.warning(
                "Minimums not met after %d draws; repairing the last candidate",
                attempts,
            )
            candidate = _repair(candidate, charset, mode.minimums, source)
            break
        candidate = _draw(charset, mode.length, source)
        attempts += 1

    return "".join(candidate)


def generate_passwords(
    charset: CharSet,
    params: GenerationParams,
    source: RandomSource,
    *,
    rejection_attempts: int = DEFAULT_REJECTION_ATTEMPTS,
) -> list[str]:
    """
    Generate params.count passwords with one shared source.

    All parameter/character-set checks run before the first draw, so an
    invalid request never produces partial output.
    """
    validate(params, charset)

    mode = params.mode
    logger.debug(
        "Generating %d password(s) of length %d (%s mode, %s source)",
        params.count,
        params.length,
        "patterned" if params.is_patterned else "free-form",
        source.name,
    )

    passwords: list[str] = []
    for _ in range(params.count):
        if isinstance(mode, Patterned):
            passwords.append(_from_pattern(charset, mode, source))
        else:
            passwords.append(_free_form(charset, mode, source, rejection_attempts))
    return passwords


def generate_password(
    charset: CharSet,
    params: GenerationParams,
    source: RandomSource,
    *,
    rejection_attempts: int = DEFAULT_REJECTION_ATTEMPTS,
) -> str:
    """Generate a single password, ignoring params.count."""
    single = GenerationParams(mode=params.mode, count=1)
    return generate_passwords(
        charset, single, source, rejection_attempts=rejection_attempts
    )[0]
