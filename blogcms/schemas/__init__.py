from .user import (
	UserBase,
	UserCreate,
	UserUpdate,
	UserResponse,
	UserLogin,
	Token,
)
from .author import (
	AuthorBase,
	AuthorCreate,
	AuthorUpdate,
	AuthorResponse,
	AuthorWithPostCount,
)
from .category import (
	CategoryCreate,
	CategoryUpdate,
	CategoryResponse,
	CategoryWithPostCount,
)
from .tag import (
	TagCreate,
	TagUpdate,
	TagResponse,
	TagWithPostCount,
)
from .post import (
	PostCreate,
	PostUpdate,
	PostTagsUpdate,
	PostResponse,
	PostWithRelations,
	PostAdminItem,
	PostListResponse,
	PostAdminListResponse,
)
from .comment import (
	CommentCreate,
	CommentUpdate,
	CommentResponse,
	CommentAdminResponse,
	CommentListResponse,
)
from .site_setting import (
	SiteSettingsResponse,
	SiteSettingsUpdate,
	SiteSettingsUpdateResponse,
)

__all__ = [
	# User
	"UserBase",
	"UserCreate",
	"UserUpdate",
	"UserResponse",
	"UserLogin",
	"Token",
	# Author
	"AuthorBase",
	"AuthorCreate",
	"AuthorUpdate",
	"AuthorResponse",
	"AuthorWithPostCount",
	# Category
	"CategoryCreate",
	"CategoryUpdate",
	"CategoryResponse",
	"CategoryWithPostCount",
	# Tag
	"TagCreate",
	"TagUpdate",
	"TagResponse",
	"TagWithPostCount",
	# Post
	"PostCreate",
	"PostUpdate",
	"PostTagsUpdate",
	"PostResponse",
	"PostWithRelations",
	"PostAdminItem",
	"PostListResponse",
	"PostAdminListResponse",
	# Comment
	"CommentCreate",
	"CommentUpdate",
	"CommentResponse",
	"CommentAdminResponse",
	"CommentListResponse",
	# Site settings
	"SiteSettingsResponse",
	"SiteSettingsUpdate",
	"SiteSettingsUpdateResponse",
]
