#!/usr/bin/env python3
r"""----------------------------------------------------------------------
	Basic MySQL Commands (For CLI Interaction)

	0. 📆 Create a New Database
		mysql -u root -p -e "CREATE DATABASE IF NOT EXISTS clientDB;"

	1. 🔐 Login to MySQL
		# General login
		mysql -u root -p

		# Login to a specific DB
		mysql -u root -p clientDB

	2. 🔍 Investigate Databases or Schema Objects
		SHOW DATABASES;				-- List all databases
		SHOW TABLES;				-- List tables in current database
		DESCRIBE tablename;			-- Describe structure of specific table
		SHOW CREATE TABLE meetings;	-- Full DDL incl. foreign keys

	3. 🩹 Drop the Entire Database
		mysql -u root -p -e "DROP DATABASE clientDB;"

----------------------------------------------------------------------

	Designing and Managing Client Databases Using SQL
	Client and Meeting Management System

	Goals:
		- 🗝 CREATE DATABASE / TABLE with FOREIGN KEY ... ON DELETE CASCADE
		- 🗝 Multi-row INSERT, INNER / LEFT JOIN with aggregation
		- 🗝 Availability check with NOT EXISTS + UNION ALL
		- 🗝 Soft delete (status flip) vs hard delete vs cascade delete

	Key Concepts:
		- Every statement goes through `execute_sql()` which prints
		  the query, its parameters and its outcome
		- One AUTOCOMMIT connection: each step is applied immediately,
		  a failure aborts the remaining steps without rollback
		- Dates are relative to the run date (yesterday, today, +2, +7)

	Expected end state from an empty schema:
		4 clients, 3 meetings (2 scheduled, 1 completed)
----------------------------------------------------------------------"""

import sys
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from settings import create_demo_engine, load_settings
from sql_runner import error_message, execute_sql

# ── Schema ──────────────────────────────────────────────────────────

CREATE_CLIENTS_SQL = """
	CREATE TABLE clients (
		client_id	INT AUTO_INCREMENT PRIMARY KEY,
		name		VARCHAR(100) NOT NULL,
		email		VARCHAR(150) UNIQUE NOT NULL,
		company		VARCHAR(100),
		phone		VARCHAR(20),
		address		TEXT,
		created_at	TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
		updated_at	TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
		INDEX idx_email (email),
		INDEX idx_company (company)
	)
"""

# FK listens to parent table events:
#   • ON DELETE CASCADE → a client's meetings go with the client.
CREATE_MEETINGS_SQL = """
	CREATE TABLE meetings (
		meeting_id		INT AUTO_INCREMENT PRIMARY KEY,
		client_id		INT NOT NULL,
		event_name		VARCHAR(200) NOT NULL,
		meeting_date	DATE NOT NULL,
		meeting_time	TIME NOT NULL,
		subject			VARCHAR(300) NOT NULL,
		agenda			TEXT,
		meeting_details	TEXT,
		meeting_minutes	TEXT,
		status			ENUM('scheduled', 'completed', 'cancelled') DEFAULT 'scheduled',
		created_at		TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
		updated_at		TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
		FOREIGN KEY (client_id) REFERENCES clients(client_id) ON DELETE CASCADE,
		INDEX idx_client_id (client_id),
		INDEX idx_meeting_date (meeting_date),
		INDEX idx_status (status)
	)
"""

# ── DML ─────────────────────────────────────────────────────────────

CLIENT_INSERT_SQL = """
	INSERT INTO clients (name, email, company, phone, address)
	VALUES
		(%s, %s, %s, %s, %s),
		(%s, %s, %s, %s, %s),
		(%s, %s, %s, %s, %s),
		(%s, %s, %s, %s, %s)
"""

MEETING_INSERT_SQL = """
	INSERT INTO meetings (client_id, event_name, meeting_date, meeting_time, subject, agenda, meeting_details, meeting_minutes, status)
	VALUES
		(%s, %s, %s, %s, %s, %s, %s, %s, %s),
		(%s, %s, %s, %s, %s, %s, %s, %s, %s),
		(%s, %s, %s, %s, %s, %s, %s, %s, %s)
"""

SINGLE_MEETING_INSERT_SQL = """
	INSERT INTO meetings (client_id, event_name, meeting_date, meeting_time, subject, agenda, meeting_details, meeting_minutes, status)
	VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
"""

INNER_JOIN_SQL = """
	SELECT
		m.meeting_id,
		m.event_name,
		m.meeting_date,
		m.meeting_time,
		m.subject,
		m.status,
		c.name		AS client_name,
		c.email		AS client_email,
		c.company	AS client_company
	FROM		meetings	m
	INNER JOIN	clients		c
	ON			m.client_id = c.client_id
	ORDER BY	m.meeting_date, m.meeting_time
"""

LEFT_JOIN_SQL = """
	SELECT
		c.client_id,
		c.name,
		c.email,
		c.company,
		COUNT(m.meeting_id) AS total_meetings,
		COUNT(CASE WHEN m.status = 'scheduled' THEN 1 END) AS scheduled_meetings,
		COUNT(CASE WHEN m.status = 'completed' THEN 1 END) AS completed_meetings
	FROM		clients		c
	LEFT JOIN	meetings	m
	ON			c.client_id = m.client_id
	GROUP BY	c.client_id, c.name, c.email, c.company
	ORDER BY	total_meetings DESC, c.name
"""

#........................................................................
# 🧠 Each branch of the UNION ALL yields one candidate slot for tomorrow,
# kept only when NOT EXISTS finds no live (non-cancelled) meeting
# booked at that date and time.
#........................................................................
AVAILABILITY_SQL = """
	SELECT
		DATE_ADD(CURDATE(), INTERVAL 1 DAY) AS available_date,
		'09:00:00' AS available_time
	WHERE NOT EXISTS (
		SELECT 1 FROM meetings m
		WHERE m.meeting_date = DATE_ADD(CURDATE(), INTERVAL 1 DAY)
		AND m.meeting_time = '09:00:00'
		AND m.status != 'cancelled'
	)
	UNION ALL
	SELECT
		DATE_ADD(CURDATE(), INTERVAL 1 DAY) AS available_date,
		'10:00:00' AS available_time
	WHERE NOT EXISTS (
		SELECT 1 FROM meetings m
		WHERE m.meeting_date = DATE_ADD(CURDATE(), INTERVAL 1 DAY)
		AND m.meeting_time = '10:00:00'
		AND m.status != 'cancelled'
	)
	LIMIT 3
"""

COMPLETE_MEETING_SQL = """
	UPDATE meetings
	SET meeting_minutes = %s, status = 'completed', updated_at = CURRENT_TIMESTAMP
	WHERE meeting_id = 1
"""

SUMMARY_SQL = """
	SELECT 'Total Clients' AS metric, COUNT(*) AS count
	FROM clients
	UNION ALL
	SELECT 'Total Meetings' AS metric, COUNT(*) AS count
	FROM meetings
	UNION ALL
	SELECT 'Scheduled Meetings' AS metric, COUNT(*) AS count
	FROM meetings
	WHERE status = 'scheduled'
	UNION ALL
	SELECT 'Completed Meetings' AS metric, COUNT(*) AS count
	FROM meetings
	WHERE status = 'completed'
"""

TEMP_CLIENT_EMAIL = "temp@example.com"

DEMONSTRATED = [
	"DDL: CREATE DATABASE, CREATE TABLE, DROP TABLE",
	"DML: INSERT, UPDATE, SELECT, DELETE",
	"JOINS: INNER JOIN, LEFT JOIN",
	"ADVANCED: Aggregation, LIKE operator, UNION",
	"RELATIONSHIPS: Foreign Keys, Cascading operations",
	"PRACTICAL: Meeting scheduling, availability checking",
	"DELETE OPERATIONS: Soft delete (status change) and Hard delete (permanent removal)",
]


# ── Sample data ─────────────────────────────────────────────────────

def sample_clients() -> List[Any]:
	"""Flattened positional parameters for CLIENT_INSERT_SQL."""
	rows = [
		("John Smith",		"john.smith@techcorp.com",		"TechCorp Inc.",		"+1-555-0101", "123 Tech Street, Silicon Valley, CA"),
		("Sarah Johnson",	"sarah.johnson@innovate.com",	"Innovate Solutions",	"+1-555-0102", "456 Innovation Ave, Austin, TX"),
		("Michael Chen",	"michael.chen@globaltech.com",	"Global Tech Ltd.",		"+1-555-0103", "789 Global Plaza, New York, NY"),
		("Emily Davis",		"emily.davis@startup.io",		"NextGen Startup",		"+1-555-0104", "321 Startup Blvd, San Francisco, CA"),
	]
	return [value for row in rows for value in row]


def sample_meetings(today: date) -> List[Any]:
	"""Flattened positional parameters for MEETING_INSERT_SQL."""
	yesterday = today - timedelta(days=1)
	next_week = today + timedelta(days=7)
	rows = [
		(1, "Project Kickoff",	yesterday.isoformat(),	"10:00:00", "Initial project discussion",	"Discuss project scope and timeline",	"Kickoff meeting for new project",	"Scope defined, timeline approved",	"completed"),
		(2, "Product Demo",		today.isoformat(),		"14:30:00", "Software demonstration",		"Present new features",					"Demo of latest updates",			None,								"scheduled"),
		(3, "Contract Review",	next_week.isoformat(),	"09:00:00", "Legal contract discussion",	"Review terms and conditions",			"Contract negotiation meeting",		None,								"scheduled"),
	]
	return [value for row in rows for value in row]


# ── Scripted sequence ───────────────────────────────────────────────

def run_demo(conn, database: str = "clientDB", today: Optional[date] = None) -> List[Dict[str, Any]]:
	"""Run the fixed statement sequence on *conn*; returns the summary rows."""
	today = today or date.today()

	# [Step 2] Create & select the database
	execute_sql(conn, f"CREATE DATABASE IF NOT EXISTS `{database}`", [], "CREATE DATABASE")
	execute_sql(conn, f"USE `{database}`", [], "SELECT DATABASE")

	# [Step 3] Clean slate (child table first)
	execute_sql(conn, "DROP TABLE IF EXISTS meetings", [], "DROP MEETINGS TABLE")
	execute_sql(conn, "DROP TABLE IF EXISTS clients", [], "DROP CLIENTS TABLE")

	# [Step 4-5] Schema
	execute_sql(conn, CREATE_CLIENTS_SQL, [], "CREATE CLIENTS TABLE")
	execute_sql(conn, CREATE_MEETINGS_SQL, [], "CREATE MEETINGS TABLE WITH FOREIGN KEY")

	# [Step 6-7] Sample data
	print("\nINSERTING SAMPLE DATA...")
	execute_sql(conn, CLIENT_INSERT_SQL, sample_clients(), "INSERT ALL CLIENTS (Multi-row INSERT)")
	execute_sql(conn, MEETING_INSERT_SQL, sample_meetings(today), "INSERT ALL MEETINGS (Multi-row INSERT)")

	# [Step 8-11] Reads
	execute_sql(conn, "SELECT * FROM clients ORDER BY name", [], "READ - GET ALL CLIENTS")
	execute_sql(conn, INNER_JOIN_SQL, [], "INNER JOIN - MEETINGS WITH CLIENT INFO")
	execute_sql(conn, LEFT_JOIN_SQL, [], "LEFT JOIN - ALL CLIENTS WITH MEETING COUNTS")
	execute_sql(conn, AVAILABILITY_SQL, [], "AVAILABILITY CHECK - FIND OPEN MEETING SLOTS")

	# [Step 12] Schedule a follow-up in two days
	execute_sql(
		conn, SINGLE_MEETING_INSERT_SQL,
		[1, "Follow-up Meeting", (today + timedelta(days=2)).isoformat(), "11:00:00",
		 "Project status update", "Review progress and next steps", "Weekly check-in meeting",
		 None, "scheduled"],
		"CREATE - SCHEDULE NEW MEETING",
	)

	# [Step 13] Attach minutes and complete
	execute_sql(
		conn, COMPLETE_MEETING_SQL,
		["Meeting completed successfully. All objectives met. Next steps: Begin development phase."],
		"UPDATE - ADD MEETING MINUTES",
	)

	# [Step 14] Pattern search
	execute_sql(
		conn, "SELECT * FROM clients WHERE company LIKE %s ORDER BY name", ["%Tech%"],
		"SEARCH - FIND CLIENTS BY COMPANY (LIKE operator)",
	)

	# [Step 15-17] Soft delete, then hard delete of the cancelled row only
	execute_sql(
		conn,
		"UPDATE meetings SET status = 'cancelled', meeting_minutes = 'Meeting cancelled due to schedule conflict' WHERE meeting_id = 3",
		[], "UPDATE - CANCEL MEETING (SOFT DELETE)",
	)
	execute_sql(
		conn, "DELETE FROM meetings WHERE meeting_id = %s AND status = %s", [3, "cancelled"],
		"HARD DELETE - PERMANENTLY REMOVE CANCELLED MEETING",
	)
	execute_sql(
		conn, "SELECT meeting_id, event_name, status FROM meetings ORDER BY meeting_id", [],
		"VERIFY DELETE - SHOW REMAINING MEETINGS",
	)

	# [Step 18] Cascade: temp client + meeting, then delete the client
	execute_sql(
		conn, "INSERT INTO clients (name, email, company, phone) VALUES (%s, %s, %s, %s)",
		["Temp Client", TEMP_CLIENT_EMAIL, "Temp Corp", "+1-555-9999"],
		"INSERT TEMPORARY CLIENT FOR CASCADE DEMO",
	)
	temp_rows = execute_sql(
		conn, "SELECT client_id FROM clients WHERE email = %s", [TEMP_CLIENT_EMAIL],
		"GET TEMPORARY CLIENT ID",
	)
	temp_client_id = temp_rows[0]["client_id"]

	execute_sql(
		conn,
		"""
		INSERT INTO meetings (client_id, event_name, meeting_date, meeting_time, subject, status)
		VALUES (%s, %s, CURDATE(), '15:00:00', %s, 'scheduled')
		""",
		[temp_client_id, "Temp Meeting", "Temporary meeting for cascade demo"],
		"INSERT TEMPORARY MEETING FOR CASCADE DEMO",
	)
	execute_sql(
		conn,
		"SELECT m.meeting_id, m.event_name, c.name AS client_name FROM meetings m JOIN clients c ON m.client_id = c.client_id WHERE c.email = %s",
		[TEMP_CLIENT_EMAIL], "SHOW MEETINGS BEFORE CASCADE DELETE",
	)
	execute_sql(
		conn, "DELETE FROM clients WHERE email = %s", [TEMP_CLIENT_EMAIL],
		"HARD DELETE WITH CASCADE - DELETE CLIENT (WILL DELETE ASSOCIATED MEETINGS)",
	)
	execute_sql(
		conn, "SELECT COUNT(*) AS remaining_temp_meetings FROM meetings WHERE client_id = %s", [temp_client_id],
		"VERIFY CASCADE DELETE - COUNT REMAINING TEMP MEETINGS (SHOULD BE 0)",
	)

	# [Step 19] Summary
	return execute_sql(conn, SUMMARY_SQL, [], "SUMMARY - DATABASE STATISTICS")


def main() -> int:
	print("Designing and Managing Client Databases Using SQL")
	print("=" * 60)
	print("Course-end Project: Client and Meeting Management System")
	print("=" * 60)

	engine = None
	try:
		settings = load_settings()
		engine = create_demo_engine(settings)

		print("\nCONNECTING TO MYSQL...")
		with engine.connect() as conn:
			print("Connected to MySQL server")
			run_demo(conn, settings.database)

		print("\nSQL DEMONSTRATION COMPLETED SUCCESSFULLY!")
		print("\nDemonstrated SQL Operations:")
		for line in DEMONSTRATED:
			print(line)
		return 0

	except Exception as err:
		print("\nError:", error_message(err), file=sys.stderr)
		return 1

	finally:
		# engine.dispose() closes every pooled connection; always in
		# 'finally' so the connection is released on success or failure.
		if engine is not None:
			engine.dispose()
			print("\nDisconnected from MySQL")


if __name__ == "__main__":
	sys.exit(main())
