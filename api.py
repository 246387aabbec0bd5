from __future__ import annotations

import os
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from goanalyzer.config import resolve_config
from goanalyzer.errors import GoAnalyzerError
from goanalyzer.fs_scan import list_go_files
from goanalyzer.importer import Importer
from goanalyzer.model import AnalyzeResult, Package
from goanalyzer.repo import analyze_repository


class AnalyzeRequest(BaseModel):
	root_path: str


class ImportDirRequest(BaseModel):
	directory: str
	names: Optional[List[str]] = None


class GorootResponse(BaseModel):
	path: str
	goroot: bool


def get_importer(request: Request) -> Importer:
	state = request.app.state
	if getattr(state, "importer", None) is None:
		try:
			state.importer = Importer(resolve_config())
		except GoAnalyzerError as e:
			raise HTTPException(status_code=500, detail=str(e))
	return state.importer


def create_app(importer: Optional[Importer] = None) -> FastAPI:
	app = FastAPI(title="Go Package Analyzer")
	app.state.importer = importer

	@app.post("/analyze", response_model=AnalyzeResult)
	def analyze(req: AnalyzeRequest, imp: Importer = Depends(get_importer)) -> AnalyzeResult:
		root = os.path.abspath(req.root_path)
		if not os.path.isdir(root):
			raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
		try:
			return analyze_repository(imp, root)
		except GoAnalyzerError as e:
			raise HTTPException(status_code=400, detail=str(e))

	@app.post("/import-dir", response_model=Package)
	def import_dir(req: ImportDirRequest, imp: Importer = Depends(get_importer)) -> Package:
		directory = os.path.abspath(req.directory)
		if not os.path.isdir(directory):
			raise HTTPException(status_code=400, detail=f"Invalid directory: {directory}")
		names = req.names if req.names is not None else list_go_files(directory)
		try:
			return imp.import_dir(directory, names)
		except GoAnalyzerError as e:
			raise HTTPException(status_code=400, detail=str(e))

	@app.get("/goroot", response_model=GorootResponse)
	def goroot(path: str, imp: Importer = Depends(get_importer)) -> GorootResponse:
		return GorootResponse(path=path, goroot=imp.is_goroot(path))

	return app


app = create_app()
