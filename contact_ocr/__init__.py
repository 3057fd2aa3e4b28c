"""Contact OCR.

Extracts a person's name, postal address and phone number from scanned
documents by running OCR (Tesseract or Google Cloud Vision) and a
rule-based field extraction engine over the recognized text.
"""
