#!/usr/bin/env python3
"""
Geosearch Backend - Run Script
This script checks the database is reachable and starts the FastAPI backend server
"""

import os
import sys
import subprocess
import socket
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def check_port_open(host, port):
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(2)
    result = sock.connect_ex((host, port))
    sock.close()
    return result == 0

def check_socket_dir(path):
    """Managed deployments expose Postgres as .s.PGSQL.5432 inside the instance directory"""
    return Path(path, ".s.PGSQL.5432").exists()

def main():
    print_colored("🚀 Starting Geosearch Backend...", "blue")

    check_file_exists("geosearch/main.py", "geosearch/main.py not found. Please run this script from the backend directory.")

    instance = os.environ.get("INSTANCE_CONNECTION_NAME", "")
    port = os.environ.get("PORT", "8080")

    if instance:
        socket_dir = os.path.join(os.environ.get("DB_SOCKET_DIR", "/cloudsql"), instance)
        print_colored(f"🔍 Checking database socket in {socket_dir}...", "blue")
        if not check_socket_dir(socket_dir):
            print_colored(f"⚠️  Warning: no Postgres socket found in {socket_dir}", "yellow")
    else:
        db_host = os.environ.get("DB_HOST", "127.0.0.1")
        db_port = int(os.environ.get("DB_PORT", "5432"))
        print_colored(f"🔍 Checking PostgreSQL connection on {db_host}:{db_port}...", "blue")
        if not check_port_open(db_host, db_port):
            print_colored(f"⚠️  Warning: PostgreSQL doesn't appear to be running on {db_host}:{db_port}", "yellow")
            print("Start the database or the Cloud SQL proxy first:")
            print("  - Using Docker: docker run -d -p 5432:5432 -e POSTGRES_PASSWORD=postgres postgis/postgis")
            print("  - Using the proxy: cloud-sql-proxy <INSTANCE_CONNECTION_NAME>")
            print()
            print("The server refuses to start while the database is unreachable.")

    print_colored("✅ Pre-flight checks done!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print(f"📍 Search API: http://localhost:{port}/api/search?lat=30.2672&lng=-97.7431")
    print(f"📍 Health check: http://localhost:{port}/health")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "geosearch.main:app",
            "--host", "0.0.0.0",
            "--port", port
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Backend server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Server exited: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
