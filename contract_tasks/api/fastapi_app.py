"""FastAPI 통합: 태스크 레지스트리를 읽기 전용 HTTP 엔드포인트로 노출"""

import time
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from contract_tasks.registry.task_registry import (
    CompositeDefault,
    NotFoundError,
    TaskDisabledError,
    TaskRegistry,
)
from contract_tasks.scripts import get_scripts


class TaskInfo(BaseModel):
    """태스크 정보 응답"""
    path: str
    command: Optional[str] = Field(None, description="leaf 태스크의 커맨드 (group 은 None)")
    default: List[str] = Field(default_factory=list, description="composite default 하위 태스크")
    children: List[str] = Field(default_factory=list)
    enabled: bool = True
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ResolveResponse(BaseModel):
    """경로 해석 응답"""
    path: str
    command: str
    sequence: List[str] = Field(default_factory=list, description="composite default 면 실행 순서")


def create_app(
    registry: Optional[TaskRegistry] = None,
    title: str = "Contract Tasks API",
    description: str = "워크스페이스 빌드/스키마 태스크 조회 API",
    version: str = "0.1.0",
) -> FastAPI:
    """
    FastAPI 앱을 생성합니다. 커맨드를 실행하는 엔드포인트는 없습니다.

    Args:
        registry: TaskRegistry 인스턴스 (None이면 전역 스크립트 레지스트리)
        title: API 타이틀
        description: API 설명
        version: API 버전

    Returns:
        FastAPI 앱 인스턴스
    """
    if registry is None:
        registry = get_scripts()

    app = FastAPI(
        title=title,
        description=description,
        version=version,
    )

    @app.get("/")
    def root():
        """루트 엔드포인트"""
        return {
            "message": title,
            "version": version,
            "endpoints": {
                "tasks": "/tasks",
                "task": "/tasks/{path}",
                "resolve": "/resolve/{path}",
            },
        }

    @app.get("/tasks")
    def list_tasks(include_disabled: bool = False):
        """호출 가능한 태스크 경로 목록"""
        return {"tasks": registry.list_tasks(include_disabled=include_disabled)}

    @app.get("/tasks/{path}", response_model=TaskInfo)
    def get_task_info(path: str):
        """특정 태스크 정보 (비활성 태스크 포함)"""
        try:
            definition = registry.get(path)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return TaskInfo(
            path=path,
            command=definition.command,
            default=list(definition.default) if definition.default else [],
            children=list(definition.children.keys()),
            enabled=definition.enabled,
            description=definition.description,
            tags=list(definition.tags),
        )

    @app.get("/resolve/{path}", response_model=ResolveResponse)
    def resolve(path: str):
        """경로를 실행될 커맨드로 해석"""
        try:
            resolved = registry.resolve(path)
        except TaskDisabledError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        if isinstance(resolved, CompositeDefault):
            return ResolveResponse(
                path=path, command=resolved.render(path), sequence=list(resolved)
            )
        return ResolveResponse(path=path, command=resolved)

    @app.get("/health")
    def health():
        """헬스 체크"""
        return {"status": "healthy", "timestamp": time.time()}

    return app


def main() -> None:
    import uvicorn

    uvicorn.run(create_app(), host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
