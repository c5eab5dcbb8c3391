from __future__ import annotations

import logging
import os
import time

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import get_current_user, require_user
from .auth.google import (
    GoogleAuthError,
    create_authorization_url,
    exchange_code,
    fetch_profile,
)
from .logging_config import setup_logging
from .recommendations.engine import recommend_tasks
from .recommendations.errors import RecommendationNotFound
from .recommendations.models import ErrorResponse, RecommendedTask
from .storage import repository
from .storage.models import (
    Reward,
    RewardCreate,
    RewardUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
    User,
    UserCreate,
    UserUpdate,
)
from .storage.seed import seed_demo_data

setup_logging(os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Quest API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "task-quest-secret-change-in-production"),
)

if os.environ.get("SEED_DEMO_DATA") == "1":
    counts = seed_demo_data()
    logger.info("Seeded demo data: %s", counts)


# ── Errors & logging ─────────────────────────────────────────────────────


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RecommendationNotFound)
async def recommendation_not_found(request: Request, exc: RecommendationNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(repository.RecordNotFound)
async def record_not_found(request: Request, exc: repository.RecordNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(repository.DuplicateError)
async def duplicate_record(request: Request, exc: repository.DuplicateError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(ValidationError)
async def invalid_record(request: Request, exc: ValidationError) -> JSONResponse:
    fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
    return JSONResponse(status_code=422, content={"error": f"Invalid value for: {', '.join(fields)}"})


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get(
    "/recommend/{user_id}",
    response_model=list[RecommendedTask],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def recommend(user_id: str) -> list[RecommendedTask]:
    return recommend_tasks(user_id)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.get("/auth/google")
def google_login(request: Request) -> RedirectResponse:
    url, state = create_authorization_url()
    request.session["oauth_state"] = state
    return RedirectResponse(url)


@app.get("/auth/google/callback")
def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    expected_state = request.session.pop("oauth_state", None)
    if error or not code:
        raise HTTPException(status_code=400, detail="Google login was cancelled")
    if not state or state != expected_state:
        raise HTTPException(status_code=400, detail="Invalid OAuth state")

    try:
        profile = fetch_profile(exchange_code(code))
    except GoogleAuthError:
        raise HTTPException(status_code=502, detail="Google login failed")

    user = repository.find_user_by_google_id(profile["sub"])
    if user is None:
        raise HTTPException(status_code=401, detail="No account for this Google user")

    request.session["user"] = {
        "id": user.id,
        "username": user.username,
        "google_id": user.google_id,
    }
    return RedirectResponse("/auth/me")


@app.get("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(request: Request) -> dict | None:
    return get_current_user(request)


# ── Task endpoints ───────────────────────────────────────────────────────


@app.post("/tasks", response_model=Task, status_code=201)
def create_task(body: TaskCreate) -> Task:
    return repository.create_task(body)


@app.get("/tasks", response_model=list[Task])
def list_tasks() -> list[Task]:
    return repository.list_tasks()


@app.get("/tasks/{task_id}", response_model=Task)
def get_task(task_id: str) -> Task:
    task = repository.get_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@app.put("/tasks/{task_id}", response_model=Task)
def update_task(task_id: str, body: TaskUpdate) -> Task:
    task = repository.update_task(task_id, body)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@app.delete("/tasks/{task_id}")
def delete_task(task_id: str) -> dict:
    if not repository.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Task deleted successfully"}


# ── Reward endpoints ─────────────────────────────────────────────────────


@app.post("/rewards", response_model=Reward, status_code=201)
def create_reward(body: RewardCreate) -> Reward:
    return repository.create_reward(body)


@app.get("/rewards", response_model=list[Reward])
def list_rewards() -> list[Reward]:
    return repository.list_rewards()


@app.get("/rewards/{code}", response_model=Reward)
def get_reward(code: str) -> Reward:
    reward = repository.get_reward_by_code(code)
    if reward is None:
        raise HTTPException(status_code=404, detail="Reward not found")
    return reward


@app.put("/rewards/{code}", response_model=Reward)
def update_reward(code: str, body: RewardUpdate) -> Reward:
    reward = repository.update_reward_by_code(code, body)
    if reward is None:
        raise HTTPException(status_code=404, detail="Reward not found")
    return reward


@app.delete("/rewards/{code}")
def delete_reward(code: str) -> dict:
    if not repository.delete_reward_by_code(code):
        raise HTTPException(status_code=404, detail="Reward not found")
    return {"message": "Reward deleted successfully"}


# ── User endpoints ───────────────────────────────────────────────────────


@app.post("/users", response_model=User, status_code=201)
def create_user(body: UserCreate) -> User:
    return repository.create_user(body)


@app.get("/users", response_model=list[User])
def list_users() -> list[User]:
    return repository.list_users()


@app.get("/users/me", response_model=User)
def current_user_record(session_user: dict = Depends(require_user)) -> User:
    user = repository.get_user(session_user["id"])
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@app.get("/users/{user_id}", response_model=User)
def get_user(user_id: str) -> User:
    user = repository.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@app.put("/users/{user_id}", response_model=User)
def update_user(user_id: str, body: UserUpdate) -> User:
    user = repository.update_user(user_id, body)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@app.delete("/users/{user_id}")
def delete_user(user_id: str) -> dict:
    if not repository.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User deleted successfully"}


@app.post("/users/{user_id}/reward/{reward_id}")
def assign_reward(user_id: str, reward_id: str) -> dict:
    user = repository.assign_reward(user_id, reward_id)
    return {"message": "Reward assigned successfully", "user": user.model_dump(mode="json")}


@app.delete("/users/{user_id}/reward/{reward_id}")
def remove_reward(user_id: str, reward_id: str) -> dict:
    user = repository.remove_reward(user_id, reward_id)
    return {"message": "Reward removed successfully", "user": user.model_dump(mode="json")}


@app.post("/users/{user_id}/task/{task_id}")
def assign_task(user_id: str, task_id: str) -> dict:
    user = repository.assign_task(user_id, task_id)
    return {"message": "Task assigned successfully", "user": user.model_dump(mode="json")}


@app.delete("/users/{user_id}/task/{task_id}")
def remove_task(user_id: str, task_id: str) -> dict:
    user = repository.remove_task(user_id, task_id)
    return {"message": "Task removed successfully", "user": user.model_dump(mode="json")}


@app.post("/users/{user_id}/task/{task_id}/complete")
def complete_task(user_id: str, task_id: str) -> dict:
    user = repository.complete_task(user_id, task_id)
    return {"message": "Task marked as completed", "user": user.model_dump(mode="json")}
