# mediacat/services/registries/media.py
from __future__ import annotations

from functools import partial
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from mediacat.common.iter import unique_ids
from mediacat.common.logging import get_logger
from mediacat.common.path.safe import normalize_relative_path
from mediacat.database.core.transaction import session_scope, storage_errors
from mediacat.database.models.media import MediaFile as DBMediaFile
from mediacat.database.repos._mapping import to_domain_media_file, to_domain_media_tag, to_domain_tag
from mediacat.database.repos.base_path_repo import BasePathRepo
from mediacat.database.repos.media_query import MediaQueryRepo
from mediacat.database.repos.media_repo import SqlAlchemyMediaRepo
from mediacat.database.repos.tag_repo import TagRepo
from mediacat.domain.entities.links.media_tag_link import MediaTagLink
from mediacat.domain.entities.media_file import MediaFile
from mediacat.domain.entities.tag import Tag
from mediacat.domain.errors import BasePathError, ErrorKind, MediaError, TagError
from mediacat.domain.policies.text_limits import check_description
from mediacat.domain.ports.registries import BasePathLookup, TagLookup
from mediacat.services.schemas.media import MediaCreate, MediaPatch

logger = get_logger(__name__)

MIN_MARK = 1
MAX_MARK = 10


def _validate_attributes(
    *,
    width: Optional[int],
    height: Optional[int],
    size: Optional[float],
    mark: Optional[int],
    description: str,
) -> None:
    if width is not None and width <= 0:
        raise MediaError(ErrorKind.INVALID_WIDTH, f"width must be > 0, got {width}")
    if height is not None and height <= 0:
        raise MediaError(ErrorKind.INVALID_HEIGHT, f"height must be > 0, got {height}")
    # `not size > 0` also rejects NaN
    if size is None or not size > 0:
        raise MediaError(ErrorKind.INVALID_SIZE, f"size must be > 0, got {size}")
    if mark is not None and not MIN_MARK <= mark <= MAX_MARK:
        raise MediaError(ErrorKind.INVALID_MARK, f"mark must be between {MIN_MARK} and {MAX_MARK}, got {mark}")
    check_description(description, MediaError)


class MediaCatalog:
    """
    Media files indexed under base paths, and their tag associations.

    Invariants kept here (and backed by DB constraints):
      - (base_path_id, relative_path) is unique
      - (media_id, tag_id) is unique
      - a media file with tags cannot be deleted
    """

    def __init__(self, sessions: sessionmaker, base_paths: BasePathLookup, tags: TagLookup) -> None:
        self._sessions = sessions
        self._base_paths = base_paths
        self._tags = tags

    # ---------- helpers ----------

    def _require_base_path(self, base_path_id: int, db: Session) -> None:
        try:
            self._base_paths.get(base_path_id, db=db)
        except BasePathError as err:
            raise MediaError(ErrorKind.BASE_PATH_ERROR, f"base path error: {err.message}") from err

    def _require_tag(self, tag_id: int, db: Session) -> None:
        try:
            self._tags.get(tag_id, db=db)
        except TagError as err:
            raise MediaError(ErrorKind.TAG_ERROR, f"tag error: {err.message}") from err

    def _require_row(self, media_id: int, db: Session) -> DBMediaFile:
        if media_id <= 0:
            raise MediaError(ErrorKind.INVALID_ID, f"invalid media id {media_id}")
        row = SqlAlchemyMediaRepo(db).get_by_id(media_id)
        if row is None:
            raise MediaError(ErrorKind.NOT_FOUND, f"media {media_id} not found")
        return row

    def _indexed_after_conflict(self, base_path_id: int, relative_path: str) -> bool:
        with session_scope(self._sessions) as s:
            if BasePathRepo(s).get(base_path_id) is None:
                raise MediaError(ErrorKind.BASE_PATH_ERROR, f"base path {base_path_id} was removed")
            return SqlAlchemyMediaRepo(s).exists_relative_path(base_path_id, relative_path)

    def _tagged_after_conflict(self, media_id: int, tag_id: int) -> bool:
        with session_scope(self._sessions) as s:
            if SqlAlchemyMediaRepo(s).get_by_id(media_id) is None:
                raise MediaError(ErrorKind.NOT_FOUND, f"media {media_id} was removed")
            repo = TagRepo(s)
            if repo.get(tag_id) is None:
                raise MediaError(ErrorKind.TAG_ERROR, f"tag {tag_id} not found")
            return repo.get_link(media_id, tag_id) is not None

    # ---------- media files ----------

    def create(self, payload: MediaCreate) -> MediaFile:
        relative_path = normalize_relative_path(payload.relative_path)
        description = (payload.description or "").strip()
        recheck = partial(self._indexed_after_conflict, payload.base_path_id, relative_path)

        with storage_errors(MediaError, conflict=ErrorKind.ALREADY_EXISTS, recheck=recheck), \
                session_scope(self._sessions) as s:
            self._require_base_path(payload.base_path_id, s)

            if not relative_path:
                raise MediaError(ErrorKind.INVALID_RELATIVE_PATH, "relative path must not be empty")
            if payload.base_path_id <= 0:
                raise MediaError(ErrorKind.INVALID_BASE_PATH_ID, f"invalid base path id {payload.base_path_id}")
            _validate_attributes(
                width=payload.width,
                height=payload.height,
                size=payload.size,
                mark=payload.mark,
                description=description,
            )

            repo = SqlAlchemyMediaRepo(s)
            if repo.exists_relative_path(payload.base_path_id, relative_path):
                logger.warning("media %s already indexed under base path %s", relative_path, payload.base_path_id)
                raise MediaError(
                    ErrorKind.ALREADY_EXISTS,
                    f"{relative_path} already exists under base path {payload.base_path_id}",
                )
            row = repo.create_media_file(
                relative_path=relative_path,
                base_path_id=payload.base_path_id,
                size=payload.size,
                width=payload.width,
                height=payload.height,
                mark=payload.mark,
                description=description,
                media_type=payload.media_type,
            )
            s.flush()
            created = to_domain_media_file(row)
        logger.info("indexed media %s under base path %s (id=%s)", created.relative_path, created.base_path_id, created.id)
        return created

    def get(self, media_id: int, *, db: Optional[Session] = None) -> MediaFile:
        with storage_errors(MediaError), session_scope(self._sessions, db) as s:
            return to_domain_media_file(self._require_row(media_id, s))

    def get_by_relative_path(self, base_path_id: int, relative_path: str) -> MediaFile:
        relative_path = normalize_relative_path(relative_path)
        if not relative_path:
            raise MediaError(ErrorKind.INVALID_RELATIVE_PATH, "relative path must not be empty")
        if base_path_id <= 0:
            raise MediaError(ErrorKind.INVALID_BASE_PATH_ID, f"invalid base path id {base_path_id}")
        with storage_errors(MediaError), session_scope(self._sessions) as s:
            row = SqlAlchemyMediaRepo(s).get_by_relative_path(base_path_id, relative_path)
            if row is None:
                raise MediaError(ErrorKind.NOT_FOUND, f"{relative_path} not found under base path {base_path_id}")
            return to_domain_media_file(row)

    def update(self, media_id: int, patch: Optional[MediaPatch] = None) -> None:
        """
        Read-merge-validate-write. Only the fields set in `patch` change;
        validation runs on the merged record.
        """
        changes = (patch or MediaPatch()).model_dump(exclude_none=True)
        if "description" in changes:
            changes["description"] = changes["description"].strip()

        with storage_errors(MediaError), session_scope(self._sessions) as s:
            row = self._require_row(media_id, s)
            merged = {
                "width": row.width,
                "height": row.height,
                "size": row.size,
                "mark": row.mark,
                "description": row.description or "",
            }
            merged.update(changes)
            _validate_attributes(**merged)
            SqlAlchemyMediaRepo(s).update_media_file(row, changes)
            s.flush()
        if changes:
            logger.info("updated media %s: %s", media_id, ", ".join(sorted(changes)))

    def list(self, base_path_id: int) -> List[MediaFile]:
        """Media files indexed under `base_path_id` (which must exist), by id."""
        with storage_errors(MediaError), session_scope(self._sessions) as s:
            self._require_base_path(base_path_id, s)
            return [to_domain_media_file(r) for r in MediaQueryRepo(s).list_for_base_path(base_path_id)]

    def delete(self, media_id: int) -> None:
        """Delete a media file; refused with IN_USE while it carries tags."""
        with storage_errors(MediaError, in_use=True), session_scope(self._sessions) as s:
            row = self._require_row(media_id, s)
            n = TagRepo(s).count_links_for_media(media_id)
            if n:
                logger.warning("media %s still carries %d tag(s)", media_id, n)
                raise MediaError(ErrorKind.IN_USE, f"media {media_id} carries {n} tag(s)")
            SqlAlchemyMediaRepo(s).delete_media_file(row)
            s.flush()
        logger.info("deleted media %s", media_id)

    # ---------- tagging ----------

    def tag_media(self, media_id: int, tag_id: int) -> MediaTagLink:
        recheck = partial(self._tagged_after_conflict, media_id, tag_id)
        with storage_errors(MediaError, conflict=ErrorKind.ALREADY_TAGGED, recheck=recheck), \
                session_scope(self._sessions) as s:
            self._require_row(media_id, s)
            self._require_tag(tag_id, s)
            repo = TagRepo(s)
            if repo.get_link(media_id, tag_id) is not None:
                logger.warning("media %s is already tagged with %s", media_id, tag_id)
                raise MediaError(ErrorKind.ALREADY_TAGGED, f"media {media_id} is already tagged with {tag_id}")
            link = repo.add_tag_to_media(media_id, tag_id)
            s.flush()
            out = to_domain_media_tag(link)
        logger.info("tagged media %s with tag %s", media_id, tag_id)
        return out

    def untag_media(self, media_id: int, tag_id: int) -> None:
        with storage_errors(MediaError), session_scope(self._sessions) as s:
            self._require_row(media_id, s)
            self._require_tag(tag_id, s)
            if not TagRepo(s).remove_tag_from_media(media_id, tag_id):
                raise MediaError(ErrorKind.NOT_TAGGED, f"media {media_id} is not tagged with {tag_id}")
        logger.info("untagged media %s from tag %s", media_id, tag_id)

    def list_tags_for_media(self, media_id: int) -> List[Tag]:
        with storage_errors(MediaError), session_scope(self._sessions) as s:
            self._require_row(media_id, s)
            return [to_domain_tag(t) for t in TagRepo(s).list_for_media(media_id)]

    def list_media_by_tags(self, tag_ids: Iterable[int]) -> List[MediaFile]:
        """
        Media files tagged with *every* tag in `tag_ids` (AND, not OR),
        ordered by id. Duplicate ids are ignored.
        """
        wanted = unique_ids(tag_ids)
        if not wanted:
            raise MediaError(ErrorKind.NO_TAGS_PROVIDED, "at least one tag id is required")
        with storage_errors(MediaError), session_scope(self._sessions) as s:
            rows = MediaQueryRepo(s).list_tagged_with_all(wanted)
            return [to_domain_media_file(r) for r in rows]
