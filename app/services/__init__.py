"""
Portfolio API Services Package

Core Services:
- token_service: Session token issuing and verification
- media_service: Upload relay to the hosted media service and image URL checks
"""
