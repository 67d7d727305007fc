import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from dotenv import load_dotenv
import uvicorn

from database import IS_SQLITE, get_session, check_connection, init_db
from dependencies import hash_password, verify_password, create_access_token, get_current_user
from models import User
from routers import ROUTERS
from schemas.auth import RegisterRequest, LoginRequest, TokenResponse, UserResponse
from services.errors import NotFoundError, AccessDeniedError, ConflictError, ValidationError
from utils.logging import setup_logging

# Load .env
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
     setup_logging()
     if not check_connection():
          logger.warning("Database is not reachable at startup")
     elif IS_SQLITE:
          init_db()
     yield


# App instance
app = FastAPI(title="RentLedger API", lifespan=lifespan)

# CORS
origins = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
app.add_middleware(
     CORSMiddleware,
     allow_origins=origins,
     allow_credentials=True,
     allow_methods=["*"],
     allow_headers=["*"],
)


# Service errors -> HTTP
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
     return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(AccessDeniedError)
async def access_denied_handler(request: Request, exc: AccessDeniedError):
     return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
     return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
     logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
     return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": "Record conflicts with existing data"})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
     return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.get("/api/health")
def health():
     return {"status": "ok"}


@app.post("/api/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register_user(body: RegisterRequest, db: Session = Depends(get_session)):
     email = body.email.lower()
     if db.query(User).filter(User.email == email).first():
          raise HTTPException(status_code=400, detail="Email already registered")

     user = User(
          first_name=body.firstName,
          last_name=body.lastName,
          email=email,
          password=hash_password(body.password),
     )
     db.add(user)
     db.commit()
     db.refresh(user)
     logger.info("Registered user %s", user.id)
     return TokenResponse(token=create_access_token(user.id), user=UserResponse.model_validate(user))


@app.post("/api/login", response_model=TokenResponse)
def login_user(body: LoginRequest, db: Session = Depends(get_session)):
     user = db.query(User).filter(User.email == body.email.lower()).first()

     if not user:
          raise HTTPException(status_code=401, detail="Invalid credentials")

     if not verify_password(body.password, user.password):
          raise HTTPException(status_code=401, detail="Incorrect password")

     return TokenResponse(token=create_access_token(user.id), user=UserResponse.model_validate(user))


@app.get("/api/me", response_model=UserResponse)
def read_current_user(user: User = Depends(get_current_user)):
     return UserResponse.model_validate(user)


for router in ROUTERS:
     app.include_router(router)


# 404 Fallback Middleware
@app.middleware("http")
async def not_found_middleware(request: Request, call_next):
     try:
          response = await call_next(request)
          if response.status_code == 404 and request.scope.get("endpoint") is None:
               return JSONResponse(status_code=404, content={"error": "Route not found"})
          return response
     except Exception:
          logger.exception("Unhandled error on %s %s", request.method, request.url.path)
          return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
     port = int(os.getenv("PORT", 10000))
     uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
