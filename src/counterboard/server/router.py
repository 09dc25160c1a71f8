"""REST routes over the register store, calculator and task manager.

All routes are mounted under `/api`. Handlers are thin: they fetch the app-owned
objects from `request.app.state` and translate errors to HTTP status codes.

Store and board routes run on the event loop. Model calls block, so they run in
the threadpool behind the task manager's guard; a concurrent one gets 409.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from counterboard import __version__
from counterboard.core.exceptions import (
    DivisionByZero,
    InvalidOperand,
    SubmissionInProgress,
    TaskNotFound,
)
from counterboard.server.models import (
    ChatResponse,
    CounterState,
    ExtractResponse,
    MessageRequest,
    OperandRequest,
    TaskCreate,
    TaskStatusUpdate,
)
from counterboard.store.calculator import Calculator
from counterboard.store.register import RegisterStore
from counterboard.tasks.manager import TaskManager
from counterboard.tasks.models import Task

router = APIRouter()

T = TypeVar("T")

_COUNTER_NULLARY = {"increment", "decrement", "reset"}
_COUNTER_UNARY = {"multiply", "add", "subtract", "divide"}
_CALCULATOR_NULLARY = {"double", "clear"}
_CALCULATOR_UNARY = {"add-ratio", "subtract-ratio", "divide"}


def _store(request: Request) -> RegisterStore:
    return request.app.state.store


def _calculator(request: Request) -> Calculator:
    return request.app.state.calculator


def _manager(request: Request) -> TaskManager:
    return request.app.state.task_manager


def _require_operand(action: str, payload: OperandRequest | None) -> float:
    if payload is None:
        raise HTTPException(status_code=422, detail=f"Action {action!r} requires a value")
    return payload.value


def _apply(store: RegisterStore, op: Callable[[], DivisionByZero | None]) -> CounterState:
    try:
        # The reported count is the one this operation produced.
        with store.transaction():
            error = op()
            count = store.count
    except InvalidOperand as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    if isinstance(error, DivisionByZero):
        raise HTTPException(status_code=422, detail=str(error))
    return CounterState(count=count)


async def _guarded(call: Callable[[str], T], message: str) -> T:
    try:
        return await run_in_threadpool(call, message)
    except SubmissionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.get("/health")
async def health() -> dict[str, object]:
    return {"status": "ok", "ok": True, "version": __version__}


@router.get("/counter", response_model=CounterState)
async def get_counter(request: Request) -> CounterState:
    return CounterState(count=_store(request).count)


@router.post("/counter/{action}", response_model=CounterState)
async def counter_action(
    request: Request, action: str, payload: OperandRequest | None = None
) -> CounterState:
    store = _store(request)
    if action in _COUNTER_NULLARY:
        return _apply(store, getattr(store, action))
    if action in _COUNTER_UNARY:
        value = _require_operand(action, payload)
        return _apply(store, lambda: getattr(store, action)(value))
    raise HTTPException(status_code=404, detail=f"Unknown counter action: {action}")


@router.post("/calculator/{action}", response_model=CounterState)
async def calculator_action(
    request: Request, action: str, payload: OperandRequest | None = None
) -> CounterState:
    store = _store(request)
    calc = _calculator(request)
    if action in _CALCULATOR_NULLARY:
        return _apply(store, getattr(calc, action))
    if action in _CALCULATOR_UNARY:
        value = _require_operand(action, payload)
        op = {
            "add-ratio": calc.add_by_ratio,
            "subtract-ratio": calc.subtract_by_ratio,
            "divide": calc.divide_by_constant,
        }[action]
        return _apply(store, lambda: op(value))
    raise HTTPException(status_code=404, detail=f"Unknown calculator action: {action}")


@router.get("/tasks", response_model=list[Task])
async def list_tasks(request: Request) -> list[Task]:
    return list(_manager(request).board.tasks)


@router.post("/tasks", response_model=Task, status_code=201)
async def create_task(request: Request, payload: TaskCreate) -> Task:
    return _manager(request).board.add_task(
        title=payload.title,
        description=payload.description,
        priority=payload.priority,
    )


@router.patch("/tasks/{task_id}", response_model=Task)
async def update_task_status(request: Request, task_id: str, payload: TaskStatusUpdate) -> Task:
    try:
        return _manager(request).board.set_status(task_id, payload.status)
    except TaskNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/tasks/{task_id}")
async def delete_task(request: Request, task_id: str) -> dict[str, str]:
    try:
        _manager(request).board.delete(task_id)
    except TaskNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"deleted": task_id}


@router.post("/tasks/extract", response_model=ExtractResponse)
async def extract_tasks(request: Request, payload: MessageRequest) -> ExtractResponse:
    manager = _manager(request)
    added = await _guarded(manager.extract, payload.message)
    return ExtractResponse(added=added)


@router.get("/chat", response_model=list[str])
async def get_transcript(request: Request) -> list[str]:
    return list(_manager(request).chat.transcript)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: Request, payload: MessageRequest) -> ChatResponse:
    manager = _manager(request)
    reply = await _guarded(manager.send_chat, payload.message)
    return ChatResponse(reply=reply, transcript=list(manager.chat.transcript))


@router.post("/submit", response_model=ChatResponse)
async def submit(request: Request, payload: MessageRequest) -> ChatResponse:
    manager = _manager(request)
    result = await _guarded(manager.submit, payload.message)
    return ChatResponse(
        reply=result.reply,
        transcript=list(manager.chat.transcript),
        added=result.added,
    )
