"""Project permission evaluation.

A ``ProjectPermission`` is the capability set of one actor in one project. It is
built from the actor's role plus any custom rules on the membership and answers
queries of the form "may this actor perform ``action`` on ``subject``", optionally
qualified by attributes such as ``{"environment": "prod", "secret_path": "/app"}``.
"""

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any, Iterable, Mapping, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from vaultsync import crud
from vaultsync.core.exceptions import InvalidStateError, NotFoundException, PermissionException
from vaultsync.core.logging import logger
from vaultsync.core.shared_models import (
    ActorType,
    ProjectPermissionAction,
    ProjectPermissionSub,
    ProjectRole,
)

# Condition keys compared with glob patterns instead of equality
GLOB_CONDITIONS = frozenset({"secret_path"})


def _condition_matches(key: str, expected: Any, actual: Any) -> bool:
    candidates = expected if isinstance(expected, (list, tuple, set, frozenset)) else [expected]
    if key in GLOB_CONDITIONS:
        return any(fnmatchcase(str(actual), str(pattern)) for pattern in candidates)
    return actual in candidates


@dataclass(frozen=True)
class PermissionRule:
    """Allows (or, when inverted, forbids) one action on one subject."""

    action: ProjectPermissionAction
    subject: ProjectPermissionSub
    conditions: Optional[Mapping[str, Any]] = None
    inverted: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PermissionRule":
        """Build a rule from its stored JSON form."""
        return cls(
            action=ProjectPermissionAction(data["action"]),
            subject=ProjectPermissionSub(data["subject"]),
            conditions=data.get("conditions") or None,
            inverted=bool(data.get("inverted", False)),
        )

    def applies_to(self, action: ProjectPermissionAction, subject: ProjectPermissionSub) -> bool:
        """Whether the rule speaks about this action and subject at all."""
        return self.action == action and self.subject == subject

    def matches(self, attributes: Optional[Mapping[str, Any]]) -> bool:
        """Whether the rule's conditions hold for the given attributes.

        Without attributes the query is a subject-type check: conditional allow
        rules count, conditional deny rules do not.
        """
        if not self.conditions:
            return True
        if attributes is None:
            return not self.inverted
        for key, expected in self.conditions.items():
            if key not in attributes or not _condition_matches(key, expected, attributes[key]):
                return False
        return True


def _grant(subject: ProjectPermissionSub, *actions: ProjectPermissionAction) -> tuple:
    return tuple(PermissionRule(action, subject) for action in actions)


_ALL_ACTIONS = tuple(ProjectPermissionAction)

ROLE_RULES: dict[ProjectRole, tuple[PermissionRule, ...]] = {
    ProjectRole.ADMIN: (
        *_grant(ProjectPermissionSub.INTEGRATIONS, *_ALL_ACTIONS),
        *_grant(ProjectPermissionSub.SECRETS, *_ALL_ACTIONS),
    ),
    ProjectRole.MEMBER: (
        *_grant(ProjectPermissionSub.INTEGRATIONS, *_ALL_ACTIONS),
        *_grant(ProjectPermissionSub.SECRETS, *_ALL_ACTIONS),
    ),
    ProjectRole.VIEWER: (
        *_grant(ProjectPermissionSub.INTEGRATIONS, ProjectPermissionAction.READ),
        *_grant(ProjectPermissionSub.SECRETS, ProjectPermissionAction.READ),
    ),
    ProjectRole.NO_ACCESS: (),
}


class ProjectPermission:
    """Resolved capability set of one actor in one project."""

    def __init__(self, project_id: UUID, rules: Iterable[PermissionRule]):
        """Create a permission handle.

        Args:
        ----
            project_id (UUID): The project the rules apply to.
            rules (Iterable[PermissionRule]): Allow and deny rules, in any order.

        """
        self.project_id = project_id
        self.rules = tuple(rules)

    def can(
        self,
        action: ProjectPermissionAction,
        subject: ProjectPermissionSub,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Whether some allow rule matches and no deny rule does."""
        relevant = [rule for rule in self.rules if rule.applies_to(action, subject)]
        if any(rule.inverted and rule.matches(attributes) for rule in relevant):
            return False
        return any(not rule.inverted and rule.matches(attributes) for rule in relevant)

    def throw_unless_can(
        self,
        action: ProjectPermissionAction,
        subject: ProjectPermissionSub,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Raise a PermissionException naming the denied capability.

        Raises:
        ------
            PermissionException: If ``can`` is False.

        """
        if self.can(action, subject, attributes):
            return
        raise PermissionException(
            f"Not allowed to {action.value} {subject.value}",
            action=action.value,
            subject=subject.value,
            attributes=dict(attributes) if attributes else None,
        )


class PermissionService:
    """Builds permission handles from project memberships."""

    async def get_project_permission(
        self,
        db: AsyncSession,
        actor: ActorType,
        actor_id: UUID,
        project_id: UUID,
        actor_auth_method: str,
        actor_org_id: UUID,
    ) -> ProjectPermission:
        """Resolve the permission handle of an actor in a project.

        Args:
        ----
            db (AsyncSession): The database session.
            actor (ActorType): Kind of principal.
            actor_id (UUID): Id of the principal.
            project_id (UUID): The project to evaluate against.
            actor_auth_method (str): How the actor authenticated.
            actor_org_id (UUID): Organization the actor authenticated against.

        Returns:
        -------
            ProjectPermission: The handle; there are no partial handles.

        Raises:
        ------
            NotFoundException: If the project does not exist.
            PermissionException: If the project belongs to another organization or
                the actor has no membership in it.
            InvalidStateError: If the membership carries an unknown role.

        """
        project = await crud.project.get(db, project_id)
        if project is None:
            raise NotFoundException("Project not found")

        if project.organization_id != actor_org_id:
            raise PermissionException("Actor does not have access to this project's organization")

        membership = await crud.project_membership.get_by_actor(
            db, project_id=project_id, actor_id=actor_id, actor_type=actor
        )
        if membership is None:
            raise PermissionException("Actor is not a member of this project")

        try:
            role = ProjectRole(membership.role)
        except ValueError as e:
            raise InvalidStateError(f"Unknown project role '{membership.role}'") from e

        rules = [
            *ROLE_RULES[role],
            *(PermissionRule.from_dict(rule) for rule in membership.custom_rules or []),
        ]
        logger.debug(
            f"Resolved {len(rules)} permission rules for {ActorType(actor).value} {actor_id} "
            f"({actor_auth_method}) in project {project_id}"
        )
        return ProjectPermission(project_id=project_id, rules=rules)


permission_service = PermissionService()
