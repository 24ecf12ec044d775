"""registry documents and the errors raised while fetching them."""
