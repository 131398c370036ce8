"""Image upload backend: multipart uploads, static file serving and metadata listing."""
