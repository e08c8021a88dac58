"""
Quick demo script to run the curation API locally.

This script starts a local server and shows how to make requests to the endpoint.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Testimonial Curation Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Curation:      POST http://localhost:8000/ai/curate-testimonials")
    print("   - API Docs:           http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/ai/curate-testimonials" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'[{"id": "t1", "text": "Great!", "author": "Ana", "date": "2024-05-01"}]\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "curation_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
