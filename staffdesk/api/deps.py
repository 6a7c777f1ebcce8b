from fastapi import Header, HTTPException

from staffdesk.services.access import ACCESS_DENIED_DETAIL, is_staff_authorized


def require_staff(
    x_user_role: str | None = Header(None, description="Caller role set by the auth gateway"),
) -> str:
    if not is_staff_authorized(x_user_role):
        raise HTTPException(status_code=403, detail=ACCESS_DENIED_DETAIL)
    return x_user_role
