"""QR Attendance package.

Organized by feature modules (students, attendance, scanner) with a thin
Flask controller layer over service/repository layers.
"""
