from pydantic import BaseModel, Field


class CallerIdentity(BaseModel):
    account_id: str
    arn: str = Field(description="IAM principal the credentials resolve to")
    user_id: str
