from ctok import main

raise SystemExit(main())
