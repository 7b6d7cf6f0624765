from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pathlib import Path
from collections import OrderedDict
from typing import Optional
import os
import threading

#logging stuff
from booster_logs.loggers import server_logger
from booster_logs.endpoints import router as logs_router
from booster_logs.middleware import RequestLoggingMiddleware

# request bodies
from booster_components.server_classes import GeneratePackRequest, GeneratePodRequest, SessionRequest

from booster_components.belts.belt_cache import GenerationSession
from booster_components.card_utils.catalog import CatalogRegistry, UnknownSetError
from booster_components.card_utils.pack import generate_booster_pack
from booster_components.card_utils.pack_utils import scan_catalog_dir
from booster_components.card_utils.pod import generate_sealed_pod

CATALOG_DIR = Path(os.getenv("CATALOG_DIR", "catalogs"))
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "256"))

app = FastAPI()
app.include_router(logs_router)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware, logger=server_logger)

catalogs = CatalogRegistry()


class SessionHouse:
    """
    Live generation sessions by id.

    Holds at most `max_sessions`; creating one more evicts the session that
    was used least recently.
    """

    def __init__(self, registry: CatalogRegistry, max_sessions: int = MAX_SESSIONS):
        self.registry = registry
        self.max_sessions = max_sessions
        self.sessions: "OrderedDict[str, GenerationSession]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> GenerationSession:
        session = GenerationSession(self.registry)
        with self._lock:
            while len(self.sessions) >= self.max_sessions:
                evicted, _ = self.sessions.popitem(last=False)

                #log code
                server_logger.info(
                    "session_evicted",
                    session_id=evicted,
                    max_sessions=self.max_sessions
                )
            self.sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Optional[GenerationSession]:
        with self._lock:
            session = self.sessions.get(session_id)
            if session is not None:
                self.sessions.move_to_end(session_id)
            return session

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self.sessions.pop(session_id, None) is not None

    def get_session_status(self) -> list:
        """Summary of every live session"""
        return [
            {
                "session_id": s.session_id,
                "packs_generated": s.packs_generated,
                "belts": len(s.belts)
            }
            for s in self.sessions.values()
        ]


session_house = SessionHouse(catalogs)


def unknown_set(set_code: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={
        "error": f"Unknown set {set_code}",
        "available_sets": catalogs.set_codes()
    })


def unknown_session(session_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={
        "error": f"Unknown session {session_id}"
    })


def register_catalogs(catalog_dir: Path) -> dict:
    results = scan_catalog_dir(catalog_dir, catalogs)

    if results["errors"]:
        #log code
        server_logger.warning(
            "catalog_registration_errors",
            errors=results["errors"]
        )
    return results


# startup functions
@app.on_event("startup")
async def startup_event():
    # Auto-register any catalogs found in CATALOG_DIR
    if CATALOG_DIR.exists():
        results = register_catalogs(CATALOG_DIR)
        if results["added"]:

            #log code
            server_logger.info(
                "startup_catalogs_registered",
                count=len(results["added"]),
                sets=results["added"]
            )
    else:
        server_logger.warning(
            "startup_catalog_dir_missing",
            path=str(CATALOG_DIR)
        )


@app.get("/")
async def read_root():
    return {"status": "ok", "sets": catalogs.set_codes(), "sessions": len(session_house.sessions)}


@app.get("/available_sets")
async def list_available_sets():
    """List all sets with a loaded catalog."""
    return JSONResponse(status_code=200, content={
        "sets": catalogs.set_codes()
    })


@app.post("/admin/register_catalogs")
async def register_catalogs_from_directory():
    """
    Admin endpoint: Scan CATALOG_DIR and register any new set catalogs.
    Returns stats about sets added, skipped, and errors.
    """
    #log code
    server_logger.info(
        "admin_register_catalogs_invoked"
    )

    if not CATALOG_DIR.exists():

        #log code
        server_logger.error(
            "admin_register_catalogs_dir_not_found",
            path=str(CATALOG_DIR)
        )

        return JSONResponse(status_code=500, content={
            "error": "catalog directory not found"
        })

    results = register_catalogs(CATALOG_DIR)

    #log code
    server_logger.info(
        "admin_register_catalogs_complete",
        added_count=len(results["added"]),
        skipped_count=len(results["skipped"]),
        error_count=len(results["errors"]),
        added=results["added"]
    )

    return JSONResponse(status_code=200, content={
        "message": "Catalog registration complete",
        "added": results["added"],
        "skipped": results["skipped"],
        "errors": results["errors"],
        "summary": {
            "added_count": len(results["added"]),
            "skipped_count": len(results["skipped"]),
            "error_count": len(results["errors"])
        }
    })


@app.post("/sessions")
async def create_session():
    session = session_house.create()

    #log code
    server_logger.info(
        "session_created",
        session_id=session.session_id
    )
    return JSONResponse(status_code=201, content={"session_id": session.session_id})


@app.get("/sessions")
async def list_sessions():
    return {"sessions": session_house.get_session_status()}


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    if not session_house.remove(session_id):
        return unknown_session(session_id)

    #log code
    server_logger.info(
        "session_deleted",
        session_id=session_id
    )
    return {"message": "Session deleted", "session_id": session_id}


@app.post("/sessions/reset")
async def reset_session(req: SessionRequest):
    """Throw away a session's belts so the next pack starts from fresh belts."""
    session = session_house.get(req.session_id)
    if session is None:
        return unknown_session(req.session_id)

    session.reset()
    return {"message": "Belt cache reset", "session_id": session.session_id}


@app.get("/sessions/{session_id}/belts")
async def session_belts(session_id: str):
    session = session_house.get(session_id)
    if session is None:
        return unknown_session(session_id)
    return session.status()


def resolve_session(session_id: Optional[str]):
    """Requested session, or a throwaway one when no id is given. None if the id is unknown."""
    if session_id is None:
        return GenerationSession(catalogs)
    return session_house.get(session_id)


@app.post("/generate_pack")
async def generate_pack(req: GeneratePackRequest):
    """Open one booster pack for `set_code`."""
    session = resolve_session(req.session_id)
    if session is None:
        return unknown_session(req.session_id)

    try:
        pack = generate_booster_pack(session, req.set_code)
    except UnknownSetError:

        #log code
        server_logger.warning(
            "generate_pack_unknown_set",
            set_code=req.set_code
        )
        return unknown_set(req.set_code)

    #log code
    server_logger.info(
        "pack_generated",
        set_code=req.set_code,
        session_id=session.session_id,
        leader=next((c.name for c in pack.cards if c.is_leader), None)
    )

    return JSONResponse(status_code=200, content={
        "session_id": session.session_id,
        "pack": pack.model_dump(mode="json", by_alias=True)
    })


@app.post("/generate_pod")
async def generate_pod(req: GeneratePodRequest):
    """Open a sealed pod of `pack_count` packs from freshly reset belts."""
    session = resolve_session(req.session_id)
    if session is None:
        return unknown_session(req.session_id)

    try:
        pod = generate_sealed_pod(session, req.set_code, req.pack_count)
    except UnknownSetError:

        #log code
        server_logger.warning(
            "generate_pod_unknown_set",
            set_code=req.set_code
        )
        return unknown_set(req.set_code)

    return JSONResponse(status_code=200, content={
        "session_id": session.session_id,
        "pod": pod.model_dump(mode="json", by_alias=True)
    })


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
