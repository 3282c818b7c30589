"""
Top-level package for the WordPress → MDX migration utility.

This package turns a WordPress XML export and a directory of
pre-downloaded images into the MDX content tree used by the foundation
site, and audits the result.  Modules are split into subpackages:

* :mod:`mdx_migrator.extractors` – parse the WXR export into records
* :mod:`mdx_migrator.parsers` – rewrite HTML bodies into MDX
* :mod:`mdx_migrator.migrators` – write documents, JSON data and images
* :mod:`mdx_migrator.utils` – image index, menu builder, report, errors

Orchestration is handled in :mod:`mdx_migrator.migration_tool`; the
independent verification pass lives in :mod:`mdx_migrator.audit`.
"""
