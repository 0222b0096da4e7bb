"""Compressed rotating log sink: numbered rotation slots plus gzip archive generations."""
