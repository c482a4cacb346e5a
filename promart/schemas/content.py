"""Blog and contact-message Pydantic schemas."""


from datetime import datetime

from promart.schemas.common import CamelModel

class BlogCreate(CamelModel):
    title: str
    excerpt: str
    content: str
    author: str
    read_time: str
    category: str
    image: str | None = None

class BlogUpdate(CamelModel):
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    author: str | None = None
    read_time: str | None = None
    category: str | None = None
    image: str | None = None

class BlogOut(CamelModel):
    id: str
    title: str
    excerpt: str
    content: str
    author: str
    read_time: str
    category: str
    image: str
    date: datetime
    created_at: datetime
    updated_at: datetime

class BlogAction(CamelModel):
    message: str
    blog: BlogOut

class ContactCreate(CamelModel):
    # Presence is checked by the service so a blank form gets one message
    name: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None

class ContactStatusUpdate(CamelModel):
    status: str

class ContactOut(CamelModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime
    updated_at: datetime

class ContactAction(CamelModel):
    success: bool = True
    message: str
    contact: ContactOut

class ContactListResponse(CamelModel):
    success: bool = True
    contacts: list[ContactOut]

class SuccessMessage(CamelModel):
    success: bool = True
    message: str
