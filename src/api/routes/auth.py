"""Authentication routes (register, login, me)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from api.security import create_access_token, get_current_user_required, to_user_response
from domain.model.errors import DomainError, DuplicateError, StoreError, ValidationError
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user and return a JWT.

    Raises:
        HTTPException: 409 if email already exists, 400 if the password is too weak
    """
    try:
        user = auth_service.register(repo, request.email, request.password)
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info("User registered", extra={"userId": user.id, "email": request.email})
    return AuthResponse(token=create_access_token(user.id), user=to_user_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 if credentials are invalid, 500 if the user store is failing
    """
    try:
        user = auth_service.authenticate(repo, request.email, request.password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info("User logged in", extra={"userId": user.id, "email": request.email})
    return AuthResponse(token=create_access_token(user.id), user=to_user_response(user))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return current_user
