"""
Profile CRUD API
GET/POST/DELETE for the profile itself, PUT/DELETE for experience and education
"""

from typing import List

import structlog
from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, status

from devconnector.api.deps import get_current_user, get_current_user_oid, parse_object_id
from devconnector.core.exceptions import SERVER_ERROR
from devconnector.models.profile import Education, Experience, Profile, Social
from devconnector.models.user import User
from devconnector.schemas.profile import (
    SOCIAL_FIELDS,
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
    build_profile_response,
)
from devconnector.services.github_service import (
    GithubProfileNotFound,
    GithubService,
    get_github_service,
)
from devconnector.services.profile_service import ProfileService, get_profile_service
from devconnector.services.user_service import UserService, get_user_service

logger = structlog.get_logger(__name__)

router = APIRouter()

NO_PROFILE = "There is no profile for this user"
PROFILE_NOT_FOUND = "Profile not found"


def server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=SERVER_ERROR,
    )


async def require_own_profile(profiles: ProfileService, user_oid: ObjectId) -> Profile:
    """Helper to get the caller's profile or fail with 400"""
    profile = await profiles.get_by_user(user_oid)
    if not profile:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NO_PROFILE)
    return profile


async def populate(profile: Profile, users: UserService) -> ProfileResponse:
    user = await users.get(profile.user)
    return build_profile_response(profile, user)


# ==================== Profile CRUD Endpoints ====================

@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_oid: ObjectId = Depends(get_current_user_oid),
    profiles: ProfileService = Depends(get_profile_service),
    users: UserService = Depends(get_user_service),
):
    """
    Get current user's profile

    **Auth**: JWT required
    """
    try:
        profile = await require_own_profile(profiles, user_oid)
        return await populate(profile, users)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("get_my_profile_failed", error=str(e), exc_info=True)
        raise server_error()


@router.post("", response_model=ProfileResponse)
async def upsert_my_profile(
    payload: ProfileUpsert,
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """
    Create or update current user's profile

    **Auth**: JWT required

    Fields missing from the body keep their stored values. Social links
    are replaced by the ones present in the body.
    """
    try:
        provided = payload.model_dump(exclude_unset=True)
        social = Social(**{k: provided.pop(k) for k in SOCIAL_FIELDS if k in provided})
        # Validators fill these even when absent from the body
        provided["status"] = payload.status
        provided["skills"] = payload.skills

        profile = await profiles.get_by_user(current_user.id)
        if profile:
            profile.apply_update(provided, social)
            logger.info("profile_updated", user_id=str(current_user.id))
        else:
            profile = Profile(user=current_user.id, social=social, **provided)
            logger.info("profile_created", user_id=str(current_user.id))
        await profiles.save(profile)

        # Respond with the stored document, not the in-memory copy
        profile = await require_own_profile(profiles, current_user.id)
        return build_profile_response(profile, current_user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("upsert_profile_failed", error=str(e), exc_info=True)
        raise server_error()


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(
    profiles: ProfileService = Depends(get_profile_service),
    users: UserService = Depends(get_user_service),
):
    """Get all profiles with their owners"""
    try:
        all_profiles = await profiles.list_all()
        owner_ids = {p.user for p in all_profiles}
        owners = await users.get_many(owner_ids) if owner_ids else []
        owners_by_id = {u.id: u for u in owners}

        return [build_profile_response(p, owners_by_id.get(p.user)) for p in all_profiles]
    except Exception as e:
        logger.error("list_profiles_failed", error=str(e), exc_info=True)
        raise server_error()


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user_id(
    user_id: str,
    profiles: ProfileService = Depends(get_profile_service),
    users: UserService = Depends(get_user_service),
):
    """Get a profile by its owner's id"""
    try:
        user_oid = parse_object_id(user_id)
        profile = await profiles.get_by_user(user_oid) if user_oid else None
        if not profile:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=PROFILE_NOT_FOUND,
            )
        return await populate(profile, users)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("get_profile_failed", user_id=user_id, error=str(e), exc_info=True)
        raise server_error()


@router.delete("")
async def delete_account(
    user_oid: ObjectId = Depends(get_current_user_oid),
    profiles: ProfileService = Depends(get_profile_service),
    users: UserService = Depends(get_user_service),
):
    """
    Delete current user's profile and then the user

    **Auth**: JWT required

    Not transactional, and the user's posts are left in place.
    """
    try:
        await profiles.delete_by_user(user_oid)
        await users.delete(user_oid)
        logger.info("account_deleted", user_id=str(user_oid))
        return {"msg": "User deleted"}
    except Exception as e:
        logger.error("delete_account_failed", error=str(e), exc_info=True)
        raise server_error()


# ==================== Experience ====================

@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    payload: ExperienceCreate,
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Add an experience entry at the front of the list"""
    try:
        profile = await require_own_profile(profiles, current_user.id)
        profile.add_experience(Experience(**payload.model_dump()))
        await profiles.save(profile)
        return build_profile_response(profile, current_user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("add_experience_failed", error=str(e), exc_info=True)
        raise server_error()


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def delete_experience(
    exp_id: str,
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Remove an experience entry; an unknown id leaves the profile unchanged"""
    try:
        profile = await require_own_profile(profiles, current_user.id)
        if profile.remove_experience(exp_id):
            await profiles.save(profile)
        return build_profile_response(profile, current_user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("delete_experience_failed", exp_id=exp_id, error=str(e), exc_info=True)
        raise server_error()


# ==================== Education ====================

@router.put("/education", response_model=ProfileResponse)
async def add_education(
    payload: EducationCreate,
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Add an education entry at the front of the list"""
    try:
        profile = await require_own_profile(profiles, current_user.id)
        profile.add_education(Education(**payload.model_dump()))
        await profiles.save(profile)
        return build_profile_response(profile, current_user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("add_education_failed", error=str(e), exc_info=True)
        raise server_error()


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def delete_education(
    edu_id: str,
    current_user: User = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Remove an education entry; an unknown id leaves the profile unchanged"""
    try:
        profile = await require_own_profile(profiles, current_user.id)
        if profile.remove_education(edu_id):
            await profiles.save(profile)
        return build_profile_response(profile, current_user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error("delete_education_failed", edu_id=edu_id, error=str(e), exc_info=True)
        raise server_error()


# ==================== GitHub ====================

@router.get("/github/{username}")
async def get_github_repos(
    username: str,
    github: GithubService = Depends(get_github_service),
):
    """Get a user's public repositories from GitHub"""
    try:
        return await github.get_user_repos(username)
    except GithubProfileNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No Github profile found",
        )
    except Exception as e:
        logger.error("github_repos_failed", username=username, error=str(e), exc_info=True)
        raise server_error()
