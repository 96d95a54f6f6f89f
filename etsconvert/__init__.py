"""
etsconvert: converts Amazon Elastic Transcoder jobs and presets to AWS
Elemental MediaConvert jobs, job templates and output presets.
"""

__version__ = "1.0.0"
