"""
Project API Routes - public listing plus admin CRUD and ordering.

Projects are always listed in canonical order (rank ascending, newest first among
equal ranks). The admin UI reorders by sending the full id sequence after a drag and
drop, or changes a single project's rank through a normal update; after any failed
ordering request it is expected to re-fetch the list rather than undo locally.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.db_handlers import ProjectDBHandler
from app.dependencies.auth import get_current_user
from app.schemas import (
    MessageResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    ReorderRequest,
)
from app.services.media_service import warn_if_untrusted_image
from app.utils.logger import setup_logger
from app.utils.object_id import normalize_object_id

logger = setup_logger("api.projects")

router = APIRouter(prefix="/projects", tags=["Projects"])


def parse_project_id(project_id: str) -> str:
    canonical = normalize_object_id(project_id)
    if canonical is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid project ID format",
        )
    return canonical


@router.get("", response_model=list[ProjectResponse])
async def list_projects(project_db_handler: ProjectDBHandler = Depends()):
    """List every project in display order."""
    try:
        projects = await project_db_handler.list_ordered()
    except Exception as e:
        logger.error(f"Error listing projects: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load projects",
        ) from e
    return [ProjectResponse.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
async def create_project(
    project_data: ProjectCreate,
    project_db_handler: ProjectDBHandler = Depends(),
):
    """Create a project. New projects rank 0 unless an order is given."""
    warn_if_untrusted_image("imageUrl", project_data.image_url)
    try:
        project = await project_db_handler.create(project_data.model_dump())
    except Exception as e:
        logger.error(f"Error creating project: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create project",
        ) from e
    logger.info(f"Created project {project.id} with order {project.order}")
    return ProjectResponse.model_validate(project)


# Declared before "/{project_id}" so "reorder" is never taken for an id
@router.put(
    "/reorder",
    response_model=MessageResponse,
    dependencies=[Depends(get_current_user)],
)
async def reorder_projects(
    reorder_data: ReorderRequest,
    project_db_handler: ProjectDBHandler = Depends(),
):
    """
    Apply a full display order: the project at position i gets order i.

    Unknown ids are skipped. On failure the client must re-fetch the list.
    """
    try:
        matched = await project_db_handler.reorder(reorder_data.item_ids)
    except Exception as e:
        logger.error(f"Reorder projects error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update project order",
        ) from e
    logger.info(
        f"Reordered projects: {matched} of {len(reorder_data.item_ids)} ids updated"
    )
    return MessageResponse(message="Order updated successfully")


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    project_db_handler: ProjectDBHandler = Depends(),
):
    project = await project_db_handler.get(parse_project_id(project_id))
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Project not found"
        )
    return ProjectResponse.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    dependencies=[Depends(get_current_user)],
)
async def update_project(
    project_id: str,
    update: ProjectUpdate,
    project_db_handler: ProjectDBHandler = Depends(),
):
    """
    Apply a partial update. Sending only ``order`` changes this project's rank and
    leaves every other rank untouched, so ranks may tie.
    """
    canonical_id = parse_project_id(project_id)
    update_data = update.to_update_dict()
    warn_if_untrusted_image("imageUrl", update_data.get("image_url"))

    try:
        if update_data.keys() == {"order"}:
            project = await project_db_handler.set_order(
                canonical_id, update_data["order"]
            )
        else:
            project = await project_db_handler.update_by_id(canonical_id, update_data)
    except Exception as e:
        logger.error(f"Error updating project {canonical_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update project",
        ) from e

    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Project not found"
        )
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", dependencies=[Depends(get_current_user)])
async def delete_project(
    project_id: str,
    project_db_handler: ProjectDBHandler = Depends(),
):
    canonical_id = parse_project_id(project_id)
    try:
        project = await project_db_handler.remove(canonical_id)
    except Exception as e:
        logger.error(f"Error deleting project {canonical_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete project",
        ) from e

    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Project not found"
        )
    logger.info(f"Deleted project {canonical_id}")
    return {}
