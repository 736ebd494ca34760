"""Document sorter.

Classifies OCR transcripts of identity, financial and education
documents (Aadhaar, PAN, voter ID, certificates), files them into a
folder taxonomy, and extracts their key fields with keyword and
pattern heuristics.
"""
