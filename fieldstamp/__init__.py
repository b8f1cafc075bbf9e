"""
Field stamping feature.

Places a single document field (free text or a signature image) on its PDF
page: percentage-based field boxes are converted to page coordinates, content
is scaled to fit the box and drawn upright regardless of the page rotation.
"""
