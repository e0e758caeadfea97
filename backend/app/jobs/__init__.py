from app.jobs.execute_script import ExecuteScript, package_result

__all__ = ["ExecuteScript", "package_result"]
