"""Dashboard controllers: drag reordering, paging and the session that owns them."""
