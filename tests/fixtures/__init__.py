"""
Test fixtures for the classification guess stage.

Contains sample messages for testing:
- simple_text.eml: single text/plain message with all recipient channels
- alternative_html_first.eml: multipart/alternative with HTML before plain text
- html_only.eml: multipart/mixed with a single text/html part
- attachment_only.eml: multipart/mixed with a single binary attachment
- nested_mixed.eml: mixed > alternative nesting plus a text attachment
- missing_boundary.eml: multipart message whose boundary never appears
- sample_guess.json: expected classification service answer
"""
