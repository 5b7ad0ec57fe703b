"""Unit tests for StatusService."""

import itertools

import pytest

from threadline.config import StatusSettings
from threadline.domain.error import NotTrackableError, ValidationError
from threadline.domain.model import AuthorizationContext
from threadline.domain.service import StatusService
from threadline.domain.value import StatusLabel, kinds
from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    MALLORY,
    make_event,
    make_repository,
    make_status,
    repo_address,
)


def make_item(event_id="p1", kind=kinds.PATCH, pubkey=ALICE, repository=True):
    tags = [["a", repo_address().coordinate]] if repository else []
    return make_event(event_id, kind=kind, created_at=1, tags=tags, pubkey=pubkey)


def scenario_statuses(item_id):
    return [
        make_status("s-open", item_id, kinds.STATUS_OPEN, created_at=1, pubkey=ALICE),
        make_status("s-closed", item_id, kinds.STATUS_CLOSED, created_at=5, pubkey=MALLORY),
        make_status("s-merged", item_id, kinds.STATUS_RESOLVED, created_at=3, pubkey=BOB),
    ]


class TestAuthorizationContext:
    """Tests for authorization_context."""

    def test_repository_adds_owner_and_maintainers(self):
        """A matching repository completes the context."""
        service = StatusService()
        item = make_item()

        context = service.authorization_context(
            item, make_repository(owner=CAROL, maintainers=[BOB])
        )

        assert context.complete
        assert context.owner == CAROL
        assert context.maintainers == frozenset({BOB})
        assert context.authors == frozenset({ALICE, BOB, CAROL})

    def test_without_repository_only_author(self):
        """No repository means an incomplete, author-only context."""
        context = StatusService().authorization_context(make_item())

        assert not context.complete
        assert context.authors == frozenset({ALICE})

    def test_mismatched_repository_ignored(self):
        """A repository other than the one the item names is not trusted."""
        service = StatusService()
        item = make_item()
        impostor = make_repository(owner=MALLORY, maintainers=[MALLORY, BOB])

        context = service.authorization_context(item, impostor)

        assert not context.complete
        assert context.authors == frozenset({ALICE})

    def test_non_repository_event_ignored(self):
        """Only repository announcements can complete a context."""
        service = StatusService()
        not_a_repo = make_event("x1", kind=kinds.ISSUE, pubkey=CAROL)

        context = service.authorization_context(make_item(repository=False), not_a_repo)

        assert not context.complete

    def test_item_without_address_accepts_given_repository(self):
        """Without an "a" tag the caller's repository is taken as given."""
        service = StatusService()

        context = service.authorization_context(
            make_item(repository=False), make_repository(owner=CAROL)
        )

        assert context.complete
        assert context.owner == CAROL

    def test_allows(self):
        """allows() checks membership in the author set."""
        context = AuthorizationContext(item_author=ALICE, owner=CAROL, complete=True)

        assert context.allows(CAROL)
        assert not context.allows(BOB)


class TestResolveStatus:
    """Tests for resolve_status."""

    def test_unauthorized_later_status_ignored(self):
        """The latest authorized status wins over a later unauthorized one."""
        # Arrange
        service = StatusService()
        item = make_item(kind=kinds.PATCH)
        context = service.authorization_context(
            item, make_repository(owner=CAROL, maintainers=[BOB])
        )

        # Act
        view = service.current_status(item, context, scenario_statuses(item.id))

        # Assert
        assert view.status.id == "s-merged"
        assert view.label is StatusLabel.MERGED

    def test_resolved_kind_labelled_resolved_on_issues(self):
        """The same status kind reads as resolved on an issue."""
        # Arrange
        service = StatusService()
        item = make_item(kind=kinds.ISSUE)
        context = service.authorization_context(
            item, make_repository(owner=CAROL, maintainers=[BOB])
        )

        # Act
        view = service.current_status(item, context, scenario_statuses(item.id))

        # Assert
        assert view.status.id == "s-merged"
        assert view.label is StatusLabel.RESOLVED

    def test_no_status_is_implicit_open(self):
        """With no candidates the item is open by default."""
        service = StatusService()
        item = make_item()
        context = service.authorization_context(item)

        view = service.current_status(item, context, [])

        assert view.status is None
        assert view.is_default
        assert view.kind is None
        assert view.label is StatusLabel.OPEN

    def test_status_for_other_item_ignored(self):
        """Authorized statuses must reference the item by id."""
        service = StatusService()
        item = make_item()
        context = service.authorization_context(item)
        elsewhere = make_status("s1", "other", kinds.STATUS_CLOSED, created_at=9)

        assert service.resolve_status(item, context, [elsewhere]) is None

    def test_non_status_kinds_ignored(self):
        """Only the four status kinds are considered."""
        service = StatusService()
        item = make_item()
        context = service.authorization_context(item)
        reply = make_event("n1", created_at=9, tags=[["e", item.id, "", "root"]])

        assert service.resolve_status(item, context, [reply]) is None

    def test_equal_timestamps_tie_broken_by_id(self):
        """The highest id wins among simultaneous statuses."""
        service = StatusService()
        item = make_item()
        context = service.authorization_context(item)
        candidates = [
            make_status("s2", item.id, kinds.STATUS_CLOSED, created_at=4),
            make_status("s1", item.id, kinds.STATUS_DRAFT, created_at=4),
        ]

        assert service.resolve_status(item, context, candidates).id == "s2"
        assert service.resolve_status(item, context, candidates[::-1]).id == "s2"

    def test_arrival_order_does_not_matter(self):
        """Every permutation of the same candidates picks the same status."""
        # Arrange
        service = StatusService()
        item = make_item(kind=kinds.PATCH)
        context = service.authorization_context(
            item, make_repository(owner=CAROL, maintainers=[BOB])
        )
        candidates = scenario_statuses(item.id) + [
            make_status("s-tie-a", item.id, kinds.STATUS_DRAFT, created_at=3, pubkey=ALICE),
            make_status("s-other", "p2", kinds.STATUS_CLOSED, created_at=9, pubkey=CAROL),
        ]

        # Act / Assert
        for permutation in itertools.permutations(candidates):
            assert service.resolve_status(item, context, permutation).id == "s-tie-a"

    def test_untracked_item_raises(self):
        """Status only applies to issues, patches and pull requests."""
        service = StatusService()
        note = make_event("n1")

        with pytest.raises(NotTrackableError):
            service.resolve_status(note, AuthorizationContext(item_author=ALICE), [])

    def test_context_for_another_author_raises(self):
        """A context built for a different item author is rejected."""
        service = StatusService()
        item = make_item()

        with pytest.raises(ValidationError):
            service.resolve_status(item, AuthorizationContext(item_author=BOB), [])


class TestPendingContextPolicy:
    """Tests for resolution before the repository is known."""

    def _candidates(self, item_id):
        return [
            make_status("s-author", item_id, kinds.STATUS_OPEN, created_at=1, pubkey=ALICE),
            make_status("s-owner", item_id, kinds.STATUS_CLOSED, created_at=2, pubkey=CAROL),
            make_status("s-maint", item_id, kinds.STATUS_DRAFT, created_at=3, pubkey=BOB),
        ]

    def test_author_only(self):
        """Only the item author counts until the repository loads."""
        service = StatusService(StatusSettings(pending_context_policy="author_only"))
        item = make_item()
        context = service.authorization_context(item)

        status = service.resolve_status(item, context, self._candidates(item.id))

        assert status.id == "s-author"

    def test_indeterminate(self):
        """Nothing counts until the repository loads."""
        service = StatusService(StatusSettings(pending_context_policy="indeterminate"))
        item = make_item()
        context = service.authorization_context(item)

        assert service.allowed_authors(item, context) is None
        assert service.resolve_status(item, context, self._candidates(item.id)) is None

    def test_address_owner(self):
        """The owner named in the item's address is trusted early."""
        service = StatusService(StatusSettings(pending_context_policy="address_owner"))
        item = make_item()
        context = service.authorization_context(item)

        status = service.resolve_status(item, context, self._candidates(item.id))

        assert not context.complete
        assert context.owner == CAROL
        assert status.id == "s-owner"
        assert context.allows(status.pubkey)

    def test_address_owner_without_address(self):
        """Items without an "a" tag fall back to the author alone."""
        service = StatusService(StatusSettings(pending_context_policy="address_owner"))
        item = make_item(repository=False)
        context = service.authorization_context(item)

        status = service.resolve_status(item, context, self._candidates(item.id))

        assert context.authors == frozenset({ALICE})
        assert status.id == "s-author"

    @pytest.mark.parametrize("policy", ["author_only", "address_owner"])
    def test_result_always_within_context_authors(self, policy):
        """Whatever the policy, the winner is someone the context allows."""
        service = StatusService(StatusSettings(pending_context_policy=policy))
        item = make_item()
        context = service.authorization_context(item)

        status = service.resolve_status(item, context, self._candidates(item.id))

        assert context.allows(status.pubkey)

    def test_policy_ignored_once_complete(self):
        """A complete context always trusts owner and maintainers."""
        service = StatusService(StatusSettings(pending_context_policy="indeterminate"))
        item = make_item()
        context = service.authorization_context(
            item, make_repository(owner=CAROL, maintainers=[BOB])
        )

        status = service.resolve_status(item, context, self._candidates(item.id))

        assert status.id == "s-maint"


class TestStatusLabel:
    """Tests for status labelling."""

    @pytest.mark.parametrize(
        "status_kind,item_kind,label",
        [
            (None, kinds.ISSUE, StatusLabel.OPEN),
            (kinds.STATUS_OPEN, kinds.PATCH, StatusLabel.OPEN),
            (kinds.STATUS_RESOLVED, kinds.PATCH, StatusLabel.MERGED),
            (kinds.STATUS_RESOLVED, kinds.PULL_REQUEST, StatusLabel.MERGED),
            (kinds.STATUS_RESOLVED, kinds.ISSUE, StatusLabel.RESOLVED),
            (kinds.STATUS_CLOSED, kinds.ISSUE, StatusLabel.CLOSED),
            (kinds.STATUS_DRAFT, kinds.PULL_REQUEST_UPDATE, StatusLabel.DRAFT),
        ],
    )
    def test_status_label(self, status_kind, item_kind, label):
        """Labels depend on both the status kind and the item kind."""
        assert StatusService.status_label(status_kind, item_kind) is label
