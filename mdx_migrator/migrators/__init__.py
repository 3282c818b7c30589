"""
Writers for the migration output.

This subpackage writes the generated content tree: one MDX file per page
or post, the attachment inventory and menu data as JSON, and a copy of
the local images in the directory the site serves as ``/images/``.
"""
