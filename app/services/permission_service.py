import logging
from typing import Dict, List, Optional
from sqlmodel import Session, select

from app.models.company import Company, CompanyMember, MemberRole
from app.models.permission import Permission, PermissionShare, PermissionType
from app.models.user import User
from app.schemas.permission import MyPermissions, PermissionRead, PermissionShareRead, UserContact

logger = logging.getLogger(__name__)

ROLE_PERMISSIONS: Dict[MemberRole, List[PermissionType]] = {
    MemberRole.ADMIN: [
        PermissionType.API_ACCESS,
        PermissionType.COMPANY_INFO_EDIT,
        PermissionType.REPORT_VIEW,
        PermissionType.REPORT_CREATE,
        PermissionType.TASK_ASSIGN,
        PermissionType.USER_MANAGE,
        PermissionType.FINANCIAL_VIEW,
    ],
    MemberRole.MANAGER: [
        PermissionType.API_ACCESS,
        PermissionType.REPORT_VIEW,
        PermissionType.REPORT_CREATE,
        PermissionType.TASK_ASSIGN,
        PermissionType.USER_MANAGE,
    ],
    MemberRole.EMPLOYEE: [
        PermissionType.REPORT_VIEW,
        PermissionType.TASK_ASSIGN,
    ],
}


def role_permissions_for(memberships: List[CompanyMember]) -> List[str]:
    """Tags implied by every membership role, concatenated (duplicates kept)."""
    tags: List[str] = []
    for membership in memberships:
        tags.extend(p.value for p in ROLE_PERMISSIONS.get(membership.role, []))
    return tags


def _contact(user: Optional[User]) -> Optional[UserContact]:
    return UserContact(name=user.name, email=user.email) if user else None


def get_direct_permissions(session: Session, user_id: str) -> List[PermissionRead]:
    rows = session.exec(
        select(Permission, User)
        .join(User, Permission.granter_id == User.id, isouter=True)
        .where(Permission.user_id == user_id)
        .where(Permission.granted == True)  # noqa: E712
        .order_by(Permission.created_at)
    ).all()
    return [
        PermissionRead.model_validate(permission).model_copy(update={"granter": _contact(granter)})
        for permission, granter in rows
    ]


def get_shared_permissions(session: Session, user_id: str) -> List[PermissionShareRead]:
    rows = session.exec(
        select(PermissionShare, User, Permission)
        .join(User, PermissionShare.sharer_id == User.id, isouter=True)
        .join(Permission, PermissionShare.permission_id == Permission.id, isouter=True)
        .where(PermissionShare.shared_with_id == user_id)
        .order_by(PermissionShare.created_at)
    ).all()
    shares = []
    for share, sharer, permission in rows:
        # a revoked permission no longer travels through its shares
        resolved = permission.type if permission is not None and permission.granted else None
        shares.append(
            PermissionShareRead.model_validate(share).model_copy(
                update={"sharer": _contact(sharer), "type": resolved}
            )
        )
    return shares


def get_memberships(session: Session, user_id: str) -> List[CompanyMember]:
    """Memberships of the user in companies that still exist."""
    rows = session.exec(
        select(CompanyMember, Company)
        .join(Company, CompanyMember.company_id == Company.id)
        .where(CompanyMember.user_id == user_id)
    ).all()
    for membership, company in rows:
        logger.debug("User %s is %s at %s", user_id, membership.role.value, company.name)
    return [membership for membership, _ in rows]


def collect_permissions(session: Session, user_id: str, shared_fallback: Optional[str] = None) -> MyPermissions:
    direct = get_direct_permissions(session, user_id)
    shared = get_shared_permissions(session, user_id)
    memberships = get_memberships(session, user_id)
    role_tags = role_permissions_for(memberships)

    tags: List[str] = [p.type.value for p in direct]
    for share in shared:
        if share.type is not None:
            tags.append(share.type.value)
        elif shared_fallback:
            tags.append(shared_fallback)
        else:
            logger.debug("Share %s does not resolve to a permission, skipped", share.id)
    tags.extend(role_tags)

    return MyPermissions(
        permissions=direct,
        shared_permissions=shared,
        role_permissions=role_tags,
        all_permissions=list(dict.fromkeys(tags)),
    )
