from fastapi import APIRouter, Query, HTTPException
from fastapi.responses import PlainTextResponse
from pathlib import Path
from datetime import datetime
import os

router = APIRouter(prefix="/admin/logs", tags=["logs"])

ALLOWED_LOG_TYPES = {"server", "belts", "packs"}
LOG_TYPE_PATTERN = "^(server|belts|packs)$"


def get_log_dir() -> Path:
    return Path(os.getenv("LOG_DIR", "logs"))


def get_log_path(log_type: str) -> Path:
    return get_log_dir() / f"{log_type}.log"


@router.get("/tail")
async def tail_logs(
    log_type: str = Query("server", pattern=LOG_TYPE_PATTERN),
    lines: int = Query(50, ge=1, le=500)
):
    """Get last N lines (like tail command)"""
    log_path = get_log_path(log_type)
    if not log_path.exists():
        return {"lines": [], "error": f"No {log_type} log file"}

    with open(log_path) as f:
        all_lines = f.readlines()
    return {"lines": all_lines[-lines:], "count": len(all_lines), "log_type": log_type}


@router.get("/search")
async def search_logs(
    log_type: str = Query("packs", pattern=LOG_TYPE_PATTERN),
    level: str = None,
    event: str = None,
    set_code: str = None,
    limit: int = Query(100, ge=1, le=1000)
):
    """Filter a log by level, event name and set code"""
    log_path = get_log_path(log_type)
    if not log_path.exists():
        return {"lines": [], "error": f"No {log_type} log file"}

    results = []
    with open(log_path) as f:
        for line in f:
            if level and f'"level": "{level}"' not in line:
                continue
            if event and f'"event": "{event}"' not in line:
                continue
            if set_code and f'"set_code": "{set_code}"' not in line:
                continue
            results.append(line.strip())
            if len(results) >= limit:
                break

    return {"lines": results, "count": len(results), "log_type": log_type}


@router.get("/available")
async def list_available_logs():
    """List all available log files"""
    log_dir = get_log_dir()
    if not log_dir.exists():
        return {"logs": []}

    logs = []
    for f in log_dir.glob("*.log"):
        stat = f.stat()
        logs.append({
            "name": f.stem,
            "size_bytes": stat.st_size,
            "modified": datetime.fromtimestamp(stat.st_mtime).isoformat()
        })
    return {"logs": logs}


@router.get("/raw/{log_type}")
async def get_raw_log(log_type: str):
    """Get raw log file content (for piping/downloading)"""
    if log_type not in ALLOWED_LOG_TYPES:
        raise HTTPException(400, f"Invalid log type. Allowed: {sorted(ALLOWED_LOG_TYPES)}")

    log_path = get_log_path(log_type)
    if not log_path.exists():
        raise HTTPException(404, f"No {log_type} log file")

    return PlainTextResponse(log_path.read_text())
