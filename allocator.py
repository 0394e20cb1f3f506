import logging
import random
import re
from typing import Optional

from errors import AllocationExhausted, DuplicateId, EmptyContent, InvalidSlug, SlugTaken
from schemas import Paste

logger = logging.getLogger(__name__)

# 58 characters; no 0, 1, I or O
ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ID_LENGTH = 8
MAX_ATTEMPTS = 10_000
DUPLICATE_RETRIES = 3

SLUG_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

_system_random = random.SystemRandom()


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_RE.fullmatch(slug))


def generate_id(rng=None, length: int = ID_LENGTH, alphabet: str = ALPHABET) -> str:
    rng = rng or _system_random
    return "".join(rng.choice(alphabet) for _ in range(length))


async def allocate_id(
    store,
    requested_slug: Optional[str] = None,
    *,
    rng=None,
    length: int = ID_LENGTH,
    alphabet: str = ALPHABET,
    max_attempts: int = MAX_ATTEMPTS,
) -> str:
    """
    Pick the id for a new paste.

    A caller-supplied slug is validated and checked against the store. The
    existence check only gives a friendly SlugTaken early; the primary key
    still decides when the row is inserted.

    Without a slug, random candidates are drawn from `alphabet` until one is
    free, giving up with AllocationExhausted after `max_attempts` draws.
    Never writes to the store.
    """
    if requested_slug is not None:
        if not is_valid_slug(requested_slug):
            raise InvalidSlug()
        if await store.exists(requested_slug):
            logger.warning(f"Slug already taken: {requested_slug}")
            raise SlugTaken()
        return requested_slug

    for _ in range(max_attempts):
        candidate = generate_id(rng, length, alphabet)
        if not await store.exists(candidate):
            return candidate
    logger.error(f"No free paste id after {max_attempts} attempts")
    raise AllocationExhausted()


async def create_paste(
    store,
    content: str,
    filename: Optional[str] = None,
    language: Optional[str] = None,
    slug: Optional[str] = None,
    *,
    rng=None,
) -> Paste:
    """Allocate an id and insert the paste under it.

    A DuplicateId on a random id means another writer won the race for that
    candidate; a fresh id is allocated, up to DUPLICATE_RETRIES times. For a
    caller-supplied slug the DuplicateId is raised as is.
    """
    if not content:
        raise EmptyContent()

    attempts = 0
    while True:
        paste_id = await allocate_id(store, slug, rng=rng)
        try:
            return await store.create(paste_id, content, filename, language)
        except DuplicateId:
            attempts += 1
            if slug is not None or attempts >= DUPLICATE_RETRIES:
                raise
            logger.warning(f"Random id {paste_id} lost an insert race, allocating another")
