from __future__ import annotations

import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request, Depends, Query
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from job_matching import (
    InvalidArgument,
    MatchResult,
    SearchCriteria,
    find_job_matches_for_worker,
    find_worker_matches_for_job,
    search_jobs,
    trending_jobs,
)
from job_matching.policies import resolve_policy_name
from models import (
    JobListResponse,
    JobMatchRequest,
    JobSearchRequest,
    MatchListResponse,
    MatchResultOut,
    Settings,
    WorkerMatchRequest,
)
from repository import InMemoryRepository


load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("shramsaathi.api")


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    return Settings(
        matching_policy=os.getenv("MATCHING_POLICY", "weighted"),
        default_match_limit=int(os.getenv("DEFAULT_MATCH_LIMIT", "10")),
        hard_trade_filter=_env_flag("HARD_TRADE_FILTER"),
        seed_data_path=os.getenv("SEED_DATA_PATH") or None,
        rate_limit_requests_per_minute=int(os.getenv("RATE_LIMIT_RPM", "60")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def build_repository(settings: Settings) -> InMemoryRepository:
    if settings.seed_data_path:
        return InMemoryRepository.load_json(settings.seed_data_path)
    logger.info("No SEED_DATA_PATH set, starting with an empty repository")
    return InMemoryRepository()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.repository = build_repository(get_settings())
    yield


app = FastAPI(title="ShramSaathi Matching API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory stores
LAST_REQUESTS_BY_IP: Dict[str, List[float]] = {}


def get_repository(request: Request) -> InMemoryRepository:
    return request.app.state.repository


async def rate_limit(request: Request, settings: Settings = Depends(get_settings)):
    ip = request.client.host if request.client else "unknown"
    window = 60.0
    max_req = settings.rate_limit_requests_per_minute
    now = time.time()
    bucket = LAST_REQUESTS_BY_IP.setdefault(ip, [])
    # prune
    while bucket and now - bucket[0] > window:
        bucket.pop(0)
    if len(bucket) >= max_req:
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
    bucket.append(now)


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    logger.warning(f"Invalid argument on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def _match_response(
    matches: List[MatchResult],
    policy: str,
    considered: int,
    started: float,
) -> MatchListResponse:
    return MatchListResponse(
        matches=[MatchResultOut.from_result(m) for m in matches],
        count=len(matches),
        policy=resolve_policy_name(policy).value,
        candidates_considered=considered,
        processing_time=f"{time.time() - started:.3f}s",
        request_id=uuid.uuid4().hex,
    )


@app.get("/")
async def root():
    return {"status": "ok", "version": "1.0.0"}


@app.post("/api/matches/jobs", response_model=MatchListResponse, dependencies=[Depends(rate_limit)])
async def match_jobs_for_worker(request: JobMatchRequest, settings: Settings = Depends(get_settings)):
    started = time.time()
    policy = request.policy or settings.matching_policy
    matches = find_job_matches_for_worker(
        request.worker,
        request.jobs,
        limit=request.limit if request.limit is not None else settings.default_match_limit,
        policy=policy,
        hard_trade_filter=settings.hard_trade_filter,
    )
    return _match_response(matches, policy, len(request.jobs), started)


@app.post("/api/matches/workers", response_model=MatchListResponse, dependencies=[Depends(rate_limit)])
async def match_workers_for_job(request: WorkerMatchRequest, settings: Settings = Depends(get_settings)):
    started = time.time()
    policy = request.policy or settings.matching_policy
    matches = find_worker_matches_for_job(
        request.job,
        request.workers,
        limit=request.limit if request.limit is not None else settings.default_match_limit,
        policy=policy,
        hard_trade_filter=settings.hard_trade_filter,
    )
    return _match_response(matches, policy, len(request.workers), started)


@app.post("/api/jobs/search", response_model=JobListResponse, dependencies=[Depends(rate_limit)])
async def search_job_list(request: JobSearchRequest):
    jobs = search_jobs(request.jobs, request.criteria)
    return JobListResponse(jobs=jobs, count=len(jobs))


@app.get("/api/jobs", response_model=JobListResponse)
async def list_jobs(
    category: Optional[str] = None,
    location: Optional[str] = None,
    min_wage: Optional[float] = Query(default=None, alias="minWage"),
    max_wage: Optional[float] = Query(default=None, alias="maxWage"),
    skills: Optional[List[str]] = Query(default=None),
    search_text: Optional[str] = Query(default=None, alias="searchText"),
    repository: InMemoryRepository = Depends(get_repository),
):
    criteria = SearchCriteria(
        category=category,
        location=location,
        min_wage=min_wage,
        max_wage=max_wage,
        skills=skills,
        search_text=search_text,
    )
    jobs = search_jobs(repository.list_active_jobs(), criteria)
    return JobListResponse(jobs=jobs, count=len(jobs))


@app.get("/api/jobs/trending", response_model=JobListResponse)
async def get_trending_jobs(
    limit: int = 10,
    repository: InMemoryRepository = Depends(get_repository),
):
    jobs = trending_jobs(repository.list_active_jobs(), limit)
    return JobListResponse(jobs=jobs, count=len(jobs))


@app.get("/api/workers/{worker_id}/job-matches", response_model=MatchListResponse)
async def get_job_matches_for_worker(
    worker_id: str,
    limit: Optional[int] = None,
    policy: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    repository: InMemoryRepository = Depends(get_repository),
):
    started = time.time()
    try:
        worker = repository.get_worker(worker_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown worker: {worker_id}")

    jobs = repository.list_active_jobs()
    policy = policy or settings.matching_policy
    matches = find_job_matches_for_worker(
        worker,
        jobs,
        limit=limit if limit is not None else settings.default_match_limit,
        policy=policy,
        hard_trade_filter=settings.hard_trade_filter,
    )
    return _match_response(matches, policy, len(jobs), started)


@app.get("/api/jobs/{job_id}/recommended-workers", response_model=MatchListResponse)
async def get_recommended_workers(
    job_id: str,
    limit: Optional[int] = None,
    policy: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    repository: InMemoryRepository = Depends(get_repository),
):
    started = time.time()
    try:
        job = repository.get_job(job_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown job: {job_id}")

    workers = repository.list_workers(near_job=job)
    policy = policy or settings.matching_policy
    matches = find_worker_matches_for_job(
        job,
        workers,
        limit=limit if limit is not None else settings.default_match_limit,
        policy=policy,
        hard_trade_filter=settings.hard_trade_filter,
    )
    return _match_response(matches, policy, len(workers), started)
