"""
Dashboard configuration settings
"""
import os
from datetime import timedelta


class DashboardConfig:
    """Centralized configuration for dashboard"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'change-me-in-production')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    # Browser sessions whose server-side state (wizards, cached app data) is kept
    MAX_SESSIONS = 500

    # Rate limiting
    RATELIMIT_STORAGE_URL = "memory://"
    RATELIMIT_DEFAULT = "100 per minute"

    # Backend REST API
    BACKEND_URL = os.environ.get('BACKEND_URL', 'http://localhost:8080/api')
    BACKEND_TIMEOUT = float(os.environ.get('BACKEND_TIMEOUT', '10'))
    BACKEND_HEALTH_PATH = os.environ.get('BACKEND_HEALTH_PATH', '/health')
    HEALTH_CHECK_INTERVAL = 15  # seconds

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    MAX_LOG_ENTRIES = 1000
    MAX_RECENT_ACTIVITY = 8

    # Uploads - same limits the backend parser enforces
    MAX_UPLOAD_SIZE = 10 * 1024 * 1024
    MAX_CONTENT_LENGTH = 32 * 1024 * 1024
    ALLOWED_UPLOAD_EXTENSIONS = ('csv', 'xlsx', 'xls')

    # Audit log
    AUDIT_PAGE_SIZE = 25
    AUDIT_EXPORT_SIZE = 10000

    # Finance: share of monthly revenue assumed collected when the backend
    # does not report collections
    COLLECTION_RATE_ESTIMATE = 0.9
    CONTRACT_EXPIRING_DAYS = 90

    FINANCIAL_FILE_TYPES = {
        'installation-materials': {
            'label': 'Installation Materials',
            'description': 'Extra material per site data (copper pipe, ODU stand, wiring, etc.)',
            'endpoint': 'installation-materials',
            'sample': (
                'Booking ID,Brand Sub Order ID,AC Details,Customer Name,State,City,Booking Address,'
                'Copper Pipe(Meter),ODU Stand(Qty),4 Core wire(Meter),3 Core wire(Meter),Drain Pipe(Meter),'
                'Ladder Rent',
                'YK-173239825110410,4112535,AC- 1,Sujit Mahapatra,Odisha,nayagarh,"Adj. To Bus Stop, At-Gania",'
                '12,2,14,,10,',
            ),
        },
        'installation-invoices': {
            'label': 'Installation Invoices',
            'description': 'Invoices per site with cost breakdowns',
            'endpoint': 'installation-invoices',
            'sample': (
                'Booking ID,AC Details,Customer Name,State,City,Booking Address,Installation & Demo,'
                'Copper Pipe(Meter),ODU Stand(Qty),Total Basic',
                'YK-173239825110410,AC- 1,Sujit Mahapatra,Odisha,nayagarh,"Adj. To Bus Stop",1200,850,450,2500',
            ),
        },
        'rent-bills': {
            'label': 'Monthly Rent Bills',
            'description': 'Monthly billing with CGST/SGST and payment status',
            'endpoint': 'rent-bills',
            'sample': (
                'MONTHS,BILLING DATE,AMOUNT,CGST,SGST,TOTAL,BILLED,PAYMET STATUS',
                'Aug2025,1-9-2025,1116,100.44,100.44,1316.88,Yes,Paid',
                'Sep2025,1-10-2025,3460,311.4,311.4,4082.8,Yes,Pending',
            ),
        },
        'final-invoice': {
            'label': 'Final Invoice Summary',
            'description': 'Invoice summary with line items, GST, and grand total',
            'endpoint': 'final-invoice',
            'sample': (
                'S.No.,Particulars,"Count/No. Of Calls (Per Product)",Basic Charges,GST,Total Amount',
                '1,Installation & Demo,97,116400,20952,137352',
                '2,Copper Pipe (Per Meter),404,343145,61766,404911',
            ),
        },
    }

    INVOICE_CATEGORIES = {
        'installation': '18% GST on installation services',
        'extra_materials': '18% GST on material supply',
        'maintenance': '18% GST on maintenance services',
    }

    CLIENT_TYPES = ('Enterprise', 'Mid-Market', 'SMB')
    TICKET_PRIORITIES = ('Low', 'Medium', 'High', 'Critical')


class TestingConfig(DashboardConfig):
    """Configuration used by the test suite"""

    TESTING = True
    SECRET_KEY = 'testing'
    BACKEND_URL = 'http://backend.test/api'
    RATELIMIT_ENABLED = False
