"""
============================================================
 JOBSCOUT v1.0.0 — main.py (Web Server)
 CV-to-job fit scoring and cover-letter generation.
 ------------------------------------------------------------
 Runs the FastAPI backend:

 Features:
   • /api/analyze        CV + job search URL → ranked, scored jobs
   • /api/generate-cover job + CV context → downloadable PDF link
   • /download/<file>    rendered cover letters (TTL-reclaimed)
   • Web-friendly CORS + tracing middleware (skips /health)
   • .env loader via core/config
============================================================
"""

# ============================== Imports =================================
import asyncio
import os
import signal
import time
from contextlib import asynccontextmanager, suppress
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from backend.api import analyze, coverletter, utils_router
from backend.core import config
from backend.core.artifacts import ArtifactStore
from backend.core.utils import log_event

# Verbosity toggles (quiet by default)
VERBOSE = os.getenv("JOBSCOUT_VERBOSE", "0") == "1"

APP_VERSION = config.APP_VERSION


# ======================= Logging Helper (quiet by default) =============
def _elog(event: str, meta: Optional[Dict[str, Any]] = None) -> None:
    if VERBOSE:
        log_event(event, meta or {})


# ===================== Artifact TTL reclamation =========================
async def _sweep_artifacts_forever(store: ArtifactStore, interval_s: float) -> None:
    while True:
        await asyncio.sleep(interval_s)
        try:
            await asyncio.to_thread(store.sweep_expired)
        except OSError as e:
            log_event("artifact_sweep_failed", {"error": str(e)})


@asynccontextmanager
async def lifespan(_app: FastAPI):
    store = ArtifactStore()
    store.sweep_expired()
    task = asyncio.create_task(
        _sweep_artifacts_forever(store, max(1, config.ARTIFACT_SWEEP_INTERVAL_SEC))
    )
    _app.state.artifact_sweeper = task
    _elog("backend_ready", {"artifact_dir": str(store.root), "ttl_s": store.ttl_seconds})
    try:
        yield
    finally:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task


# ====================== FastAPI Backend ==================================
app = FastAPI(
    title="JobScout API",
    description="CV-to-job fit scoring and cover-letter generation",
    version=APP_VERSION,
    lifespan=lifespan,
)

# ============================ CORS ======================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=False,
    allow_methods=["*"], allow_headers=["*"],
)

# ================= Download mount (cover letter PDFs) ===================
app.mount("/download", StaticFiles(directory=str(config.ARTIFACT_DIR)), name="download")


# ============================= Health ===================================
@app.get("/health", include_in_schema=False)
def health():
    return JSONResponse(
        {"ok": True, "service": "JOBSCOUT", "version": APP_VERSION},
        headers={"Cache-Control": "no-store"}
    )


# ================== Middleware — Request/Response log ===================
@app.middleware("http")
async def trace_requests(request: Request, call_next):
    start = time.time()
    path = request.url.path
    method = request.method

    # Reduce noise: skip chatty paths and preflights
    log_this = (
        VERBOSE
        and method != "OPTIONS"
        and path not in {"/health", "/favicon.ico"}
        and not path.startswith("/download/")
    )

    if log_this:
        _elog("http_request", {"method": method, "path": path})
    response: Response = await call_next(request)
    ms = (time.time() - start) * 1000
    if log_this:
        _elog("http_response", {
            "method": method, "path": path, "status": response.status_code, "ms": round(ms, 1)
        })
    if path.startswith("/download/"):
        response.headers["Cache-Control"] = "no-store"
    return response


# =========================== Register Routers ===========================
for mod in (analyze, coverletter, utils_router):
    app.include_router(mod.router)
    _elog("router_registered", {"module": mod.__name__, "prefix": mod.router.prefix})


# ============================ Web Server ================================
def start_backend():
    import uvicorn
    host, port = config.HOST, config.PORT
    log_event("backend_start", {"host": host, "port": port})
    uvicorn.run(
        app, host=host, port=port,
        log_level="info" if VERBOSE else "warning", timeout_keep_alive=25,
        reload=False, access_log=VERBOSE,
    )


# ================================ Main ==================================
if __name__ == "__main__":
    print(f"🚀 Launching JOBSCOUT v{APP_VERSION}")
    print(f"🟢 Visit → http://{config.HOST}:{config.PORT}/docs\n")

    def _graceful_exit(signum, _):
        print("\n🛑 Exiting JOBSCOUT…")
        os._exit(0)

    for sig in ("SIGINT", "SIGTERM"):
        if hasattr(signal, sig):
            signal.signal(getattr(signal, sig), _graceful_exit)

    start_backend()
