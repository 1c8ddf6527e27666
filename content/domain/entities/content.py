from pydantic import BaseModel, Field, constr

# path segment used in URLs, so no slashes
PathSlug = constr(min_length=1, max_length=255, pattern=r"^[^/\s]+$")

class ContentBase(BaseModel):
    path: PathSlug
    title: constr(min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(default=0, ge=0)
    file_url: str | None = None

class ContentCreate(ContentBase):
    category: str | None = Field(default=None, max_length=100, description="Category name; created on first use.")

    model_config = {
        "json_schema_extra": {
            "example": {
                "path": "intro-guide",
                "title": "Intro guide",
                "description": "Everything you need to get started.",
                "price": 9.5,
                "file_url": "https://contents.s3.us-east-1.amazonaws.com/content/3f2a_cover.png",
                "category": "design",
            }
        }
    }

class ContentUpdate(ContentBase):
    """Full replacement of the editable fields; category and creator are not editable."""
    model_config = {
        "json_schema_extra": {
            "example": {
                "path": "intro-guide-v2",
                "title": "Intro guide (2nd edition)",
                "description": "Updated for the new release.",
                "price": 12,
                "file_url": None,
            }
        }
    }
