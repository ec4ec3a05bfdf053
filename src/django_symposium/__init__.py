"""Conference listings, talks, and call-for-papers submissions for Django."""
