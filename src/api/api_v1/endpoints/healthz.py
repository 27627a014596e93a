from fastapi import APIRouter, status

import schemas

router = APIRouter()


@router.get(
    "", response_model=schemas.HealthCheckResponse, status_code=status.HTTP_200_OK
)
async def health_check():
    return schemas.HealthCheckResponse(status="ok", message="Server is running")
