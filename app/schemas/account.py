from pydantic import BaseModel, EmailStr, Field, field_validator

BCRYPT_MAX_BYTES = 72


class SignupRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, description="At most 72 bytes once UTF-8 encoded.")

    @field_validator("password")
    def password_fits_bcrypt(cls, v):
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "first_name": "Ada",
                "last_name": "Okafor",
                "email": "ada@example.com",
                "password": "s3cret-pass",
            }
        }


class LoginRequest(BaseModel):
    # Any string: a malformed email fails like any other unknown one
    email: str
    password: str


class ProfileUpdate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class ProfileResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
