# Services package.
#
# Each module exposes async functions that wrap the store access for a
# single table:
#
#   post_service    : CRUD + like counter for blog_posts
#   comment_service : list/append for blog_comments
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
