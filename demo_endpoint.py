"""
Quick demo script to run the invoice dashboard backend locally.

This script starts a local server and shows how to exercise the form handlers.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Invoice Dashboard Backend Demo")
    print("=" * 60)
    print()
    print("API Endpoints:")
    print("   - Health Check:    GET  http://localhost:8000/health")
    print("   - Login:           POST http://localhost:8000/login")
    print("   - Invoice list:    GET  http://localhost:8000/dashboard/invoices")
    print("   - Create invoice:  POST http://localhost:8000/dashboard/invoices/create")
    print("   - Edit invoice:    POST http://localhost:8000/dashboard/invoices/{id}/edit")
    print("   - Delete invoice:  POST http://localhost:8000/dashboard/invoices/{id}/delete")
    print("   - API Docs:             http://localhost:8000/docs")
    print()
    print("Authentication:")
    print("   Dashboard routes require the access_token cookie set by /login")
    print("   or: Authorization: Bearer <token>")
    print()
    print("Test with curl:")
    print('   curl -i -X POST "http://localhost:8000/dashboard/invoices/create" \\')
    print('     -H "Authorization: Bearer <token>" \\')
    print('     -d "customerId=<customer-uuid>" -d "amount=250.00" -d "status=pending"')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "invoice_dashboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
