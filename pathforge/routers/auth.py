from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from pathforge.core.exceptions import ConflictError
from pathforge.core.limiter import limiter, AUTH_RATE_LIMIT
from pathforge.database import get_db
from pathforge.models.user import User
from pathforge.routers.auth_deps import get_current_user
from pathforge.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from pathforge.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


def _issue_token(user: User) -> str:
    return auth_service.create_access_token(data={"sub": str(user.id), "email": user.email})


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_RATE_LIMIT)
def register(request: Request, register_data: RegisterRequest, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == register_data.email).first():
        logger.info("Registration rejected: email already registered")
        raise ConflictError("User with this email already exists")

    user = User(
        name=register_data.name,
        email=register_data.email,
        hashed_password=auth_service.get_password_hash(register_data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same address
        db.rollback()
        raise ConflictError("User with this email already exists")
    db.refresh(user)
    logger.info(f"Registered user {user.id}", extra={"user_id": user.id})

    return AuthResponse(
        message="User registered successfully",
        token=_issue_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(AUTH_RATE_LIMIT)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == login_data.email).first()
    if not user or not auth_service.verify_password(login_data.password, user.hashed_password):
        logger.info("Login failed: invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"User {user.id} logged in", extra={"user_id": user.id})
    return AuthResponse(
        message="Login successful",
        token=_issue_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
