"""Status resolution service."""

from typing import Iterable

import logfire

from threadline.config import StatusSettings
from threadline.domain import tags
from threadline.domain.error import NotTrackableError, ValidationError
from threadline.domain.model import AuthorizationContext, Event, StatusView
from threadline.domain.value import AddressPointer, PublicKey, StatusLabel, kinds

from .base import Service


class StatusService(Service):
    """Domain service deciding the current status of issues, patches and PRs.

    Anyone can publish a status event for any item, so the result only ever
    considers events that (a) come from the item author, the repository
    owner or a maintainer and (b) reference the item by id. The latest such
    event wins.
    """

    def __init__(self, settings: StatusSettings | None = None) -> None:
        """Initialize status service.

        Args:
            settings: Status settings (defaults if omitted)
        """
        self.settings = settings or StatusSettings()

    def authorization_context(
        self, item: Event, repository: Event | None = None
    ) -> AuthorizationContext:
        """Build the authorization context for a tracked item.

        Without a repository the context is incomplete: it names the item
        author, plus the owner from the item's "a" tag under the
        address_owner policy. A repository whose address differs from the one
        the item declares is ignored.

        Args:
            item: Issue, patch or pull request
            repository: Owning repository event, if resolved

        Returns:
            Authorization context
        """
        with logfire.span(
            "status_service.authorization_context",
            item_id=item.id,
            repository_id=repository.id if repository else None,
        ):
            if repository is None:
                return self._pending_context(item)

            if not self._is_repository_of(item, repository):
                logfire.warn(
                    "Repository does not match item address",
                    item_id=item.id,
                    repository_id=repository.id,
                )
                return self._pending_context(item)

            maintainers = frozenset(PublicKey(p) for p in tags.maintainers(repository))
            logfire.info(
                "Authorization context resolved",
                item_id=item.id,
                owner=repository.pubkey,
                maintainer_count=len(maintainers),
            )
            return AuthorizationContext(
                item_author=item.pubkey,
                owner=repository.pubkey,
                maintainers=maintainers,
                complete=True,
            )

    def resolve_status(
        self,
        item: Event,
        context: AuthorizationContext,
        candidates: Iterable[Event],
    ) -> Event | None:
        """Pick the authoritative status event for ``item``.

        Algorithm:
        1. Keep status kinds only
        2. Keep candidates from authorized authors
        3. Keep candidates referencing ``item`` by id
        4. Latest created_at wins, highest id breaks ties

        While ``context`` is incomplete the pending context policy applies:
        author_only trusts just the item author, indeterminate returns None,
        address_owner trusts the context authors, which then include the owner
        named in the item's "a" tag.
        Resolution should be re-run once the repository arrives.

        Args:
            item: Issue, patch or pull request
            context: Authorization context for ``item``
            candidates: Current snapshot of status events, in any order

        Returns:
            Winning status event, or None for the implicit open state

        Raises:
            NotTrackableError: If ``item`` is not an issue, patch or pull request
            ValidationError: If ``context`` was built for another author
        """
        if item.kind not in kinds.TRACKED_KINDS:
            raise NotTrackableError(item.id, item.kind)
        if context.item_author != item.pubkey:
            raise ValidationError(
                f"Authorization context for {context.item_author} "
                f"does not match item author {item.pubkey}"
            )

        candidates = list(candidates)
        with logfire.span(
            "status_service.resolve_status",
            item_id=item.id,
            candidate_count=len(candidates),
            context_complete=context.complete,
        ):
            allowed = self.allowed_authors(item, context)
            if allowed is None:
                logfire.info("Status indeterminate until repository loads", item_id=item.id)
                return None

            current: Event | None = None
            for candidate in candidates:
                if candidate.kind not in kinds.STATUS_KINDS:
                    continue
                if candidate.pubkey not in allowed:
                    logfire.debug(
                        "Discarding unauthorized status",
                        item_id=item.id,
                        status_id=candidate.id,
                        pubkey=candidate.pubkey,
                    )
                    continue
                if not tags.references_event(candidate, item.id):
                    logfire.debug(
                        "Discarding status for another item",
                        item_id=item.id,
                        status_id=candidate.id,
                    )
                    continue
                if current is None or candidate.sort_key > current.sort_key:
                    current = candidate

            logfire.info(
                "Status resolved",
                item_id=item.id,
                status_id=current.id if current else None,
                status_kind=current.kind if current else None,
            )
            return current

    def allowed_authors(
        self, item: Event, context: AuthorizationContext
    ) -> frozenset[PublicKey] | None:
        """Pubkeys whose status events count, or None while indeterminate."""
        if context.complete:
            return context.authors

        policy = self.settings.pending_context_policy
        if policy == "indeterminate":
            return None
        if policy == "address_owner":
            return context.authors
        return frozenset({context.item_author})

    def _pending_context(self, item: Event) -> AuthorizationContext:
        owner = None
        if self.settings.pending_context_policy == "address_owner":
            address = tags.repository_address(item)
            if address is not None:
                owner = address.pubkey
        return AuthorizationContext(item_author=item.pubkey, owner=owner)

    def current_status(
        self,
        item: Event,
        context: AuthorizationContext,
        candidates: Iterable[Event],
    ) -> StatusView:
        """Resolve the status and label it for display."""
        status = self.resolve_status(item, context, candidates)
        return StatusView(
            status=status,
            label=self.status_label(status.kind if status else None, item.kind),
        )

    @staticmethod
    def status_label(status_kind: int | None, item_kind: int) -> StatusLabel:
        """Label a status kind in the context of the item it applies to."""
        return StatusLabel.for_kinds(status_kind, item_kind)

    @staticmethod
    def _is_repository_of(item: Event, repository: Event) -> bool:
        if repository.kind != kinds.REPOSITORY:
            return False
        address = tags.repository_address(item)
        if address is None:
            return True
        own = AddressPointer(
            kind=repository.kind,
            pubkey=repository.pubkey,
            identifier=repository.tag_value("d") or "",
        )
        return own == address
